"""Core emulator service — the four command handlers.

Each handler is a linear, fail-fast sequence of tool invocations issued
through a :class:`~e2e_emulator.core.protocols.HostSystem` injected at
construction time.  The first failing tool raises and aborts the rest;
nothing is retried or rolled back.

Guarantees
----------
* No direct I/O and no ``print()``; progress is reported through the
  injected *reporter* callable.
* Only :class:`~e2e_emulator.exceptions.E2eEmulatorError` subclasses escape.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from pathlib import Path

from e2e_emulator.core.models import (
    KVM_UDEV_RULE,
    BugreportOptions,
    CopyAppDataOptions,
    CreateAndStartOptions,
    EmulatorLaunch,
    EnvironmentContext,
    ReadinessPolicy,
    ReversePortOptions,
)
from e2e_emulator.core.protocols import BackgroundProcess, HostSystem
from e2e_emulator.exceptions import DeviceNotReadyError, EmulatorExitedError

LICENSE_ANSWERS: str = "y\n" * 64
"""Stream of ``y`` answers fed to ``sdkmanager --licenses``."""

DEVICE_STATE_READY: str = "device"


def _silent(_message: str) -> None:
    return None


class EmulatorService:
    """Drives the Android SDK tools on behalf of the CLI commands.

    Parameters
    ----------
    context:
        SDK location and emulator identity.
    host:
        Any object satisfying the :class:`HostSystem` protocol.
    reporter:
        Called with one human-readable line per step.
    sleep, clock:
        Time sources for the readiness poll; replaced in tests.
    """

    def __init__(
        self,
        context: EnvironmentContext,
        host: HostSystem,
        *,
        reporter: Callable[[str], None] | None = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._context = context
        self._host = host
        self._report = reporter or _silent
        self._sleep = sleep
        self._clock = clock

    # ------------------------------------------------------------------
    # createAndStart
    # ------------------------------------------------------------------

    def create_and_start(self, options: CreateAndStartOptions) -> EmulatorLaunch:
        """Provision the SDK, create the AVD, boot it and wait until it is online."""
        ctx = self._context
        system_image = options.system_image

        self._enable_kvm()

        self._host.run(["sudo", "apt-get", "install", "-y", "libpulse0"])

        self._host.run([ctx.sdkmanager, "--licenses"], input_text=LICENSE_ANSWERS)

        self._report("Installing emulator...")
        self._host.run([ctx.sdkmanager, "emulator"])

        self._report(f"Installing system image '{system_image}' ...")
        self._host.run([ctx.sdkmanager, system_image])

        self._report("Installing platform tools...")
        self._host.run([ctx.sdkmanager, "platform-tools"])

        self._report("Creating emulator...")
        self._host.run(
            [
                ctx.avdmanager, "create", "avd",
                "--name", ctx.emulator_name,
                "--package", system_image,
                "--device", str(options.device),
            ]
        )

        launch = self._start_emulator()

        self._report("Waiting for emulator to become ready...")
        self.wait_until_ready(
            launch.process,
            ReadinessPolicy(timeout=options.boot_timeout),
        )
        self._report_log()
        self._host.run([ctx.adb, "-s", ctx.serial, "wait-for-device"])
        self._report("Emulator is ready")
        return launch

    def _enable_kvm(self) -> None:
        """Grant every user access to ``/dev/kvm`` via a udev rule."""
        ctx = self._context
        self._host.run(
            ["sudo", "tee", str(ctx.udev_rule_path)],
            input_text=KVM_UDEV_RULE + "\n",
        )
        self._host.run(["sudo", "udevadm", "control", "--reload-rules"])
        self._host.run(["sudo", "udevadm", "trigger", "--name-match=kvm"])

    def _start_emulator(self) -> EmulatorLaunch:
        ctx = self._context
        self._report("Starting emulator...")
        process = self._host.spawn(
            [
                ctx.emulator,
                "-avd", ctx.emulator_name,
                "-port", str(ctx.emulator_port),
                "-no-window",
                "-no-audio",
                "-no-boot-anim",
                "-partition-size", str(ctx.partition_size_mb),
            ],
            log_path=ctx.log_path,
        )
        self._host.write_text(ctx.pid_path, f"{process.pid}\n")
        self._report(f"Emulator started with pid {process.pid}")
        return EmulatorLaunch(
            pid=process.pid,
            log_path=ctx.log_path,
            pid_path=ctx.pid_path,
            process=process,
        )

    def _report_log(self) -> None:
        log = self._host.read_text(self._context.log_path)
        if log:
            self._report(log.rstrip("\n"))

    # ------------------------------------------------------------------
    # Readiness
    # ------------------------------------------------------------------

    def is_device_ready(self) -> bool:
        """Return whether ``adb get-state`` reports the emulator as online."""
        ctx = self._context
        result = self._host.run(
            [ctx.adb, "-s", ctx.serial, "get-state"],
            capture=True,
            check=False,
        )
        return (
            result.returncode == 0
            and (result.stdout or "").strip() == DEVICE_STATE_READY
        )

    def wait_until_ready(
        self,
        process: BackgroundProcess | None,
        policy: ReadinessPolicy,
    ) -> None:
        """Poll :meth:`is_device_ready` with backoff until it succeeds.

        Raises
        ------
        EmulatorExitedError
            When *process* terminates before the device comes online.
        DeviceNotReadyError
            When *policy.timeout* seconds pass without the device coming online.
        """
        deadline = self._clock() + policy.timeout
        delays = policy.delays()
        while True:
            if self.is_device_ready():
                return
            if process is not None:
                status = process.poll()
                if status is not None:
                    raise EmulatorExitedError(
                        f"Emulator exited with status {status} before becoming ready",
                        hint=self._log_hint(),
                    )
            remaining = deadline - self._clock()
            if remaining <= 0:
                raise DeviceNotReadyError(
                    f"Emulator {self._context.serial} was not ready after "
                    f"{policy.timeout:g} seconds",
                    hint=self._log_hint(),
                )
            self._sleep(min(next(delays), remaining))

    def _log_hint(self) -> str:
        log_path = self._context.log_path
        log = self._host.read_text(log_path).strip()
        if not log:
            return f"See {log_path} for emulator output."
        return f"Emulator output ({log_path}):\n{log}"

    # ------------------------------------------------------------------
    # setupReversePort
    # ------------------------------------------------------------------

    def setup_reverse_port(self, options: ReversePortOptions) -> None:
        """Make host port *options.port* reachable from the device on the same port."""
        ctx = self._context
        port = options.port
        self._report(f"Setting up reverse socket connect for port {port}")
        self._host.run(
            [ctx.adb, "-s", ctx.serial, "reverse", f"tcp:{port}", f"tcp:{port}"]
        )

    # ------------------------------------------------------------------
    # bugreport
    # ------------------------------------------------------------------

    def bugreport(self, options: BugreportOptions) -> Path:
        """Write ``adb bugreport`` output to ``<output_directory>/bugreport``."""
        ctx = self._context
        output_directory = Path(str(options.output_directory))
        report_path = output_directory / "bugreport"

        self._report("Creating bugreport...")
        self._host.make_directory(output_directory)
        self._host.run(
            [ctx.adb, "-s", ctx.serial, "bugreport"],
            stdout_path=report_path,
        )
        self._report("Created bugreport")
        return report_path

    # ------------------------------------------------------------------
    # copyAppData
    # ------------------------------------------------------------------

    def copy_app_data(self, options: CopyAppDataOptions | None = None) -> Path:
        """Copy the app's private data dir to shared storage and pull it locally."""
        ctx = self._context
        bundle = ctx.app_bundle_id
        self._host.run(
            [
                ctx.adb, "-s", ctx.serial, "shell",
                f"run-as {bundle} cp -r /data/data/{bundle} /mnt/sdcard",
            ]
        )
        self._host.run(
            [
                ctx.adb, "-s", ctx.serial, "pull",
                f"/mnt/sdcard/{bundle}", str(ctx.app_data_path),
            ]
        )
        return ctx.app_data_path
