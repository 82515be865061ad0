"""
Flashy Service

Command-line front end for the flashlight. Wires the torch backend, the
timer queue, the torch controller, the strobe scheduler and the app state
together, then reads commands from the terminal.

Architecture:
- One timer queue thread owns the torch: strobe ticks AND user commands run
  on it (commands are submitted with run_sync), so they never race.
- The main thread only reads input and prints responses.

Usage:
    python flashy_service.py                 # interactive
    python flashy_service.py --mock          # interactive, simulated torch
    python flashy_service.py --pattern sos --speed 1 --yes
    python flashy_service.py --pattern pulse --speed 2 --duration 10 --yes
"""

import argparse
import logging
import logging.handlers
import signal
import sys
import time
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple

from config.settings import (
    LOG_BACKUP_COUNT,
    LOG_DIR,
    LOG_FALLBACK_DIR,
    LOG_FILE,
    LOG_LEVEL,
)
from core.app_state import AppState, StrobeRequestResult
from core.constants import (
    ABOUT_TEXT,
    APP_NAME,
    APP_VERSION,
    SAFETY_WARNING_TEXT,
    SAFETY_WARNING_TITLE,
    THEME_COLORS,
)
from core.preferences import PreferenceStore
from hardware.controllers.torch_controller import TorchController
from hardware.factory import HardwareFactory
from hardware.interfaces.torch_interface import TorchInterface
from strobe.constants import STROBE_PATTERN_LABELS
from strobe.controllers.strobe_scheduler import StrobeScheduler
from strobe.factory import create_timer_queue
from strobe.interfaces.timer_interface import TimerQueueInterface

# Poll interval of the one-shot strobe loop (seconds)
ONE_SHOT_POLL_INTERVAL = 0.1

Handler = Callable[[List[str]], str]


class FlashyService:
    """
    Main service coordinator.

    Usage:
        service = FlashyService()
        service.run()  # Blocks until "quit" or shutdown signal
    """

    def __init__(
        self,
        torch: Optional[TorchInterface] = None,
        timer_queue: Optional[TimerQueueInterface] = None,
        preferences: Optional[PreferenceStore] = None,
        mock: bool = False,
        backend: Optional[str] = None,
    ):
        """
        Initialize all components.

        Args:
            torch: Torch backend, or None to create one via HardwareFactory
            timer_queue: Timeline for ticks and commands (default: threaded)
            preferences: Preference store (default: PREFERENCES_FILE)
            mock: Force the simulated torch
            backend: Real torch backend name ("sysfs" or "gpio")
        """
        self.logger = logging.getLogger(__name__)
        self.logger.info("Initializing Flashy Service...")

        if torch is None:
            torch = HardwareFactory.create_torch(
                mode="mock" if mock else "auto",
                backend=backend,
            )

        self.timers = timer_queue or create_timer_queue("real")
        self.torch = TorchController(torch)
        self.scheduler = StrobeScheduler(self.torch, self.timers)
        self.app = AppState(
            self.torch,
            self.scheduler,
            preferences if preferences is not None else PreferenceStore(),
        )

        self.running = False
        self._shut_down = False

        self.commands: Dict[str, Tuple[Handler, str]] = {
            "on": (self._cmd_on, "Turn the light on"),
            "off": (self._cmd_off, "Turn the light off"),
            "toggle": (self._cmd_toggle, "Toggle the light"),
            "brightness": (self._cmd_brightness, "brightness <0.1-1.0>"),
            "strobe": (self._cmd_strobe, "strobe on|off - enable strobe mode"),
            "pattern": (self._cmd_pattern, "pattern constant|pulse|sos"),
            "speed": (self._cmd_speed, "speed <0.5-5.0, step 0.5>"),
            "start": (self._cmd_start, "Start the strobe"),
            "ack": (self._cmd_ack, "Accept the safety warning and start"),
            "decline": (self._cmd_decline, "Decline the safety warning"),
            "stop": (self._cmd_stop, "Stop the strobe"),
            "color": (self._cmd_color, "color <index> - select overlay color"),
            "colors": (self._cmd_colors, "List overlay colors"),
            "status": (self._cmd_status, "Show current state"),
            "about": (self._cmd_about, "About this app"),
            "help": (self._cmd_help, "Show commands"),
        }

        self.logger.info("Flashy Service initialized")

    # =========================================================================
    # COMMAND DISPATCH
    # =========================================================================

    def handle_command(self, line: str) -> str:
        """
        Execute one command line on the timer queue thread.

        Args:
            line: Raw command text, e.g. "brightness 0.5"

        Returns:
            Response text for the user
        """
        parts = line.strip().split()
        if not parts:
            return ""

        name, args = parts[0].lower(), parts[1:]
        if name not in self.commands:
            return f"Unknown command '{name}'. Type 'help' for commands."

        handler = self.commands[name][0]
        try:
            return self.timers.run_sync(handler, args)
        except ValueError as e:
            return f"Invalid value: {e}"

    @staticmethod
    def _require_arg(args: List[str], usage: str) -> str:
        if not args:
            raise ValueError(f"usage: {usage}")
        return args[0]

    def _light_response(self, ok: bool) -> str:
        if not self.app.controls_enabled:
            return "Torch unavailable on this device"
        if not ok:
            return f"Torch did not respond ({self.torch.last_error})"
        return f"Light {'ON' if self.app.is_light_on else 'OFF'}"

    def _cmd_on(self, args: List[str]) -> str:
        return self._light_response(self.app.set_light(True))

    def _cmd_off(self, args: List[str]) -> str:
        return self._light_response(self.app.set_light(False))

    def _cmd_toggle(self, args: List[str]) -> str:
        was_on = self.app.is_light_on or self.app.strobe_active
        now_on = self.app.toggle_light()
        return self._light_response(now_on != was_on)

    def _cmd_brightness(self, args: List[str]) -> str:
        value = float(self._require_arg(args, "brightness <0.1-1.0>"))
        self.app.set_brightness(value)
        return f"Brightness {self.app.brightness:.2f}"

    def _cmd_strobe(self, args: List[str]) -> str:
        value = self._require_arg(args, "strobe on|off").lower()
        if value not in ("on", "off"):
            raise ValueError("usage: strobe on|off")
        self.app.set_strobe_mode(value == "on")
        return f"Strobe mode {'ON' if self.app.strobe_mode else 'OFF'}"

    def _cmd_pattern(self, args: List[str]) -> str:
        self.app.set_strobe_pattern(self._require_arg(args, "pattern <name>"))
        return f"Pattern {STROBE_PATTERN_LABELS[self.app.strobe_pattern]}"

    def _cmd_speed(self, args: List[str]) -> str:
        self.app.set_strobe_speed(float(self._require_arg(args, "speed <value>")))
        return f"Speed {self.app.strobe_speed}x"

    def _strobe_response(self, result: StrobeRequestResult) -> str:
        if result == StrobeRequestResult.STARTED:
            label = STROBE_PATTERN_LABELS[self.app.strobe_pattern]
            return f"Strobe started ({label}, {self.app.strobe_speed}x)"
        if result == StrobeRequestResult.STOPPED:
            return "Strobe stopped"
        if result == StrobeRequestResult.NEEDS_ACKNOWLEDGMENT:
            return (
                f"{SAFETY_WARNING_TITLE}: {SAFETY_WARNING_TEXT}\n"
                "Type 'ack' to continue or 'decline' to cancel."
            )
        if result == StrobeRequestResult.MODE_DISABLED:
            return "Strobe mode is off. Type 'strobe on' first."
        return "Torch unavailable on this device"

    def _cmd_start(self, args: List[str]) -> str:
        return self._strobe_response(self.app.request_strobe_start())

    def _cmd_ack(self, args: List[str]) -> str:
        return self._strobe_response(self.app.acknowledge_safety_warning())

    def _cmd_decline(self, args: List[str]) -> str:
        self.app.decline_safety_warning()
        return "Strobe cancelled"

    def _cmd_stop(self, args: List[str]) -> str:
        return self._strobe_response(self.app.stop_strobe())

    def _cmd_color(self, args: List[str]) -> str:
        color = self.app.select_color(int(self._require_arg(args, "color <index>")))
        return f"Color {color.name}"

    def _cmd_colors(self, args: List[str]) -> str:
        lines = []
        for index, color in enumerate(THEME_COLORS):
            marker = "*" if index == self.app.selected_color_index else " "
            lines.append(f"{marker} {index}: {color.name} ({color.hex})")
        return "\n".join(lines)

    def _cmd_status(self, args: List[str]) -> str:
        status = self.app.get_status()
        return "\n".join(
            f"{key}: {value}" for key, value in status.items() if key != "scheduler"
        )

    def _cmd_about(self, args: List[str]) -> str:
        return f"{APP_NAME} {APP_VERSION}\n{ABOUT_TEXT}"

    def _cmd_help(self, args: List[str]) -> str:
        lines = [f"  {name:<11} {text}" for name, (_, text) in self.commands.items()]
        lines.append(f"  {'quit':<11} Exit")
        return "Commands:\n" + "\n".join(lines)

    # =========================================================================
    # RUN MODES
    # =========================================================================

    def _install_signal_handlers(self) -> None:
        signal.signal(signal.SIGTERM, self._signal_handler)
        signal.signal(signal.SIGINT, self._signal_handler)

    def _signal_handler(self, signum, frame):
        signal_name = signal.Signals(signum).name
        self.logger.info(f"Received {signal_name}, shutting down...")
        self.running = False
        raise KeyboardInterrupt

    def run(self) -> None:
        """
        Interactive command loop.

        Runs until "quit", end of input, or a shutdown signal.
        """
        self.running = True
        self._install_signal_handlers()
        print(f"{APP_NAME} {APP_VERSION} - type 'help' for commands")

        try:
            while self.running:
                try:
                    line = input("flashy> ")
                except EOFError:
                    break

                if line.strip().lower() in ("quit", "exit"):
                    break

                response = self.handle_command(line)
                if response:
                    print(response)
        except KeyboardInterrupt:
            self.logger.info("Keyboard interrupt received")
        finally:
            self.shutdown()

    def run_strobe(
        self,
        pattern: str,
        speed: float,
        duration: Optional[float] = None,
        brightness: Optional[float] = None,
    ) -> bool:
        """
        One-shot mode: run a strobe (safety warning already accepted).

        Stops after duration seconds, or when a finite pattern (SOS played
        once) completes. With no duration an endless pattern runs until
        interrupted.

        Returns:
            True if the strobe started, False if it was refused or a
            setting (pattern, speed, brightness) was invalid
        """
        self.running = True
        self._install_signal_handlers()

        try:
            def begin() -> StrobeRequestResult:
                if brightness is not None:
                    self.app.set_brightness(brightness)
                self.app.set_strobe_pattern(pattern)
                self.app.set_strobe_speed(speed)
                self.app.set_strobe_mode(True)
                return self.app.acknowledge_safety_warning()

            try:
                result = self.timers.run_sync(begin)
            except ValueError as e:
                print(f"Invalid value: {e}")
                return False

            print(self._strobe_response(result))
            if result != StrobeRequestResult.STARTED:
                return False

            deadline = None if duration is None else time.monotonic() + duration
            while self.running and self.app.strobe_active:
                if deadline is not None and time.monotonic() >= deadline:
                    break
                time.sleep(ONE_SHOT_POLL_INTERVAL)
            return True
        except KeyboardInterrupt:
            self.logger.info("Keyboard interrupt received")
            return True
        finally:
            self.shutdown()

    def shutdown(self) -> None:
        """
        Graceful shutdown: stop strobe, torch off, stop timer thread,
        release hardware. Safe to call multiple times.
        """
        if self._shut_down:
            return

        self.logger.info("Shutting down Flashy Service...")
        self.running = False

        try:
            self.timers.run_sync(self.scheduler.stop, "shutdown")
        except Exception as e:
            self.logger.error(f"Error stopping strobe during shutdown: {e}")
            self.scheduler.stop(reason="shutdown")

        self.timers.shutdown()
        self.torch.cleanup()
        self._shut_down = True
        self.logger.info("Flashy Service stopped")


def setup_logging(level: str = LOG_LEVEL) -> None:
    """
    Setup logging with rotation.

    Logs to both console and file with rotation:
    - Daily rotation
    - Keep LOG_BACKUP_COUNT days of logs
    - Falls back to a local logs/ directory if LOG_DIR is not writable
    """
    logger = logging.getLogger()
    logger.setLevel(level.upper())

    # Console handler (stderr keeps command output on stdout clean)
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(logging.Formatter("%(message)s | %(name)s"))
    logger.addHandler(console_handler)

    file_format = logging.Formatter(
        "%(asctime)s %(levelname)s %(message)s | %(name)s",
    )

    log_file = Path(LOG_DIR) / LOG_FILE
    try:
        file_handler = logging.handlers.TimedRotatingFileHandler(
            log_file,
            when="midnight",
            interval=1,
            backupCount=LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
    except (PermissionError, FileNotFoundError):
        logs_dir = Path(LOG_FALLBACK_DIR)
        logs_dir.mkdir(exist_ok=True)
        fallback_log = logs_dir / LOG_FILE
        logger.warning(
            f"Cannot write to {log_file}, using fallback: {fallback_log}",
        )
        file_handler = logging.handlers.TimedRotatingFileHandler(
            fallback_log,
            when="midnight",
            interval=1,
            backupCount=LOG_BACKUP_COUNT,
            encoding="utf-8",
        )

    file_handler.setFormatter(file_format)
    logger.addHandler(file_handler)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description=f"{APP_NAME} - torch flashlight with strobe patterns",
        epilog="""
Examples:
  %(prog)s                                   # Interactive mode
  %(prog)s --mock                            # Simulated torch
  %(prog)s --pattern sos --yes               # Play SOS once
  %(prog)s --pattern pulse --speed 2 --duration 10 --yes
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--mock", action="store_true", help="Use the simulated torch")
    parser.add_argument(
        "--backend",
        choices=["sysfs", "gpio"],
        help="Real torch backend (default: TORCH_BACKEND setting)",
    )
    parser.add_argument(
        "--pattern",
        choices=["constant", "pulse", "sos"],
        help="Run this strobe pattern and exit (one-shot mode)",
    )
    parser.add_argument("--speed", type=float, default=1.0, help="Strobe speed (0.5-5.0)")
    parser.add_argument("--brightness", type=float, help="Torch brightness (0.1-1.0)")
    parser.add_argument("--duration", type=float, help="Stop the strobe after N seconds")
    parser.add_argument(
        "--yes",
        action="store_true",
        help=f"Accept the safety warning: {SAFETY_WARNING_TEXT}",
    )
    parser.add_argument("--log-level", default=LOG_LEVEL, help="Logging level")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point.

    Returns:
        Process exit code
    """
    args = parse_args(argv)
    setup_logging(args.log_level)

    logger = logging.getLogger(__name__)
    logger.info("=" * 60)
    logger.info(f"{APP_NAME} {APP_VERSION} Starting")
    logger.info("=" * 60)

    if args.pattern and not args.yes:
        print(f"{SAFETY_WARNING_TITLE}: {SAFETY_WARNING_TEXT}")
        print("Re-run with --yes to confirm.")
        return 2

    try:
        service = FlashyService(mock=args.mock, backend=args.backend)
        if args.pattern:
            started = service.run_strobe(
                args.pattern,
                args.speed,
                duration=args.duration,
                brightness=args.brightness,
            )
            return 0 if started else 1
        service.run()
        return 0
    except Exception as e:
        logger.critical(f"Fatal error in main: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
