#!/usr/bin/env python3
import os
import sys
import time
import signal
import argparse
from collections import deque

from tilewall.config import Settings, WallConfig
from tilewall.core.surface import RasterSurface
from tilewall.core.wall import Command, initialize, on_command, render_frame


class WallRunner:
    """Headless host loop: renders frames and applies queued commands"""

    def __init__(self, config_file=None, frames=0, seed=None, capture_every=0, realtime=False):
        # Load configuration
        self.settings = Settings.load(config_file)

        # Set up logging
        self.logger = Settings.setup_logging(self.settings["log_level"])
        self.logger.info("Tile wall starting...")

        self.config = WallConfig.from_settings(self.settings)
        self.width = self.settings["width"]
        self.height = self.settings["height"]
        self.frames = frames
        self.seed = seed
        self.capture_every = capture_every
        self.realtime = realtime

        self.logger.info(
            f"Viewport: {self.width}x{self.height}, cell size {self.config.cell_size}, "
            f"hold={self.config.hold_frames} fade={self.config.fade_frames} frames"
        )

        self.running = True
        self.state = None
        self.surface = None
        self.pending = deque()

        # Set up signal handling for graceful shutdown and commands
        signal.signal(signal.SIGINT, self._signal_handler)
        signal.signal(signal.SIGTERM, self._signal_handler)
        if hasattr(signal, "SIGUSR1"):
            signal.signal(signal.SIGUSR1, self._command_handler)
        if hasattr(signal, "SIGHUP"):
            signal.signal(signal.SIGHUP, self._command_handler)

    def initialize(self):
        """Create the wall state and its raster surface"""
        os.makedirs(self.config.capture_dir, exist_ok=True)
        self.surface = RasterSurface(self.width, self.height, self.config.bg_dark)
        self.state = initialize(self.width, self.height, self.config, seed=self.seed)
        return True

    def queue_command(self, command: Command):
        """Commands are applied between frames, never mid-frame"""
        self.pending.append(command)

    def _apply_pending(self):
        while self.pending:
            command = self.pending.popleft()
            try:
                self.state = on_command(self.state, command, self.surface)
            except OSError as e:
                self.logger.error(f"Error applying {command.value}: {e}")

    def start(self):
        """Run until the frame budget is used up or a stop signal arrives"""
        if not self.initialize():
            self.logger.error("Failed to initialize tile wall")
            return False

        frame_time = 1.0 / self.config.fps
        try:
            self.logger.info("Tile wall running. Press Ctrl+C to exit.")
            while self.running:
                started = time.monotonic()
                self._apply_pending()
                render_frame(self.state, self.surface)

                count = self.state.frame_count
                if self.capture_every and count % self.capture_every == 0:
                    self.queue_command(Command.CAPTURE_FRAME)

                if self.frames and count >= self.frames:
                    break

                if self.realtime:
                    remaining = frame_time - (time.monotonic() - started)
                    if remaining > 0:
                        time.sleep(remaining)

        except KeyboardInterrupt:
            self.logger.info("Keyboard interrupt received")
        finally:
            self.cleanup()

        return True

    def cleanup(self):
        """Flush queued commands and report"""
        self.logger.info("Cleaning up...")
        if self.state is not None:
            if self.capture_every and not self.pending:
                self.queue_command(Command.CAPTURE_FRAME)
            self._apply_pending()
            self.logger.info(f"Rendered {self.state.frame_count} frames")
        self.logger.info("Tile wall shutdown complete")

    def _signal_handler(self, sig, frame):
        """Handle termination signals"""
        self.logger.info(f"Received signal {sig}")
        self.running = False

    def _command_handler(self, sig, frame):
        """SIGUSR1 captures the current frame, SIGHUP reshuffles the grid"""
        if sig == getattr(signal, "SIGUSR1", None):
            self.queue_command(Command.CAPTURE_FRAME)
        else:
            self.queue_command(Command.REINITIALIZE)


def parse_arguments(argv=None):
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(description="Tile Wall renderer")

    parser.add_argument("--config", type=str, help="Path to configuration file")

    parser.add_argument("--width", type=int, help="Viewport width")

    parser.add_argument("--height", type=int, help="Viewport height")

    parser.add_argument("--cell-size", type=int, help="Tile size in pixels")

    parser.add_argument("--fps", type=int, help="Frames per second of animation time")

    parser.add_argument("--capture-dir", type=str, help="Directory for captured frames")

    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )

    parser.add_argument(
        "--frames", type=int, default=0, help="Frames to render (0 = until interrupted)"
    )

    parser.add_argument("--seed", type=int, help="Random seed for a reproducible wall")

    parser.add_argument(
        "--capture-every", type=int, default=0, help="Capture every N frames (0 = off)"
    )

    parser.add_argument(
        "--realtime", action="store_true", help="Pace frames to the configured fps"
    )

    return parser.parse_args(argv)


# Arguments that drive the runner itself rather than the settings
RUNNER_ARGS = ("config", "frames", "seed", "capture_every", "realtime")


def main(argv=None):
    """Main entry point"""
    args = parse_arguments(argv)

    # Command-line args override config file via the environment
    for key, value in vars(args).items():
        if value is not None and key not in RUNNER_ARGS:
            os.environ[f"{Settings.ENV_PREFIX}{key.upper()}"] = str(value)

    runner = WallRunner(
        args.config,
        frames=args.frames,
        seed=args.seed,
        capture_every=args.capture_every,
        realtime=args.realtime,
    )
    return 0 if runner.start() else 1


if __name__ == "__main__":
    sys.exit(main())
