# src/floatmap/main.py

import argparse
import logging
import signal
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from .config import Config, config
from .exceptions import FloatMapError
from .interaction import AnimationTimer, InteractionController
from .logging_config import setup_logging
from .telemetry import TelemetryStore, reference_store
from .visualization import DisplayTheme, FloatMapPlotGenerator, compose_frame
from .visualization.frame import MapFrame

logger = logging.getLogger(__name__)


class FloatMapSystem:
    """Owns the store, controller, animation timer and plot generator"""

    def __init__(self, cfg: Optional[Config] = None, dark_mode: Optional[bool] = None,
                 store: Optional[TelemetryStore] = None):
        self.config = cfg or config
        self.settings = self.config.map_settings()
        self.dark_mode = bool(self.config.get('display.dark_mode', False)) if dark_mode is None else dark_mode
        self.store = store
        self.controller: Optional[InteractionController] = None
        self.timer: Optional[AnimationTimer] = None
        self.plot_generator: Optional[FloatMapPlotGenerator] = None
        self.is_running = False

    def initialize_system(self) -> bool:
        """Create components and start the animation timer"""
        try:
            logger.info("Initializing float map...")
            if self.store is None:
                self.store = reference_store()
            self.controller = InteractionController(self.store, self.settings)
            self.plot_generator = FloatMapPlotGenerator(
                figure_height=int(self.config.get('visualization.figure_height', 600))
            )
            self.timer = AnimationTimer(self.controller.tick, period=self.settings.tick_period_s)
            self.timer.start()
            self.is_running = True
            logger.info(f"Float map initialized with {len(self.store)} floats")
            return True
        except FloatMapError as e:
            logger.error(f"Float map initialization failed: {e}")
            return False

    def _require_ready(self):
        if self.controller is None:
            raise RuntimeError("System not initialized")

    def current_frame(self) -> MapFrame:
        self._require_ready()
        return compose_frame(self.store, self.controller.state,
                             DisplayTheme.for_mode(self.dark_mode), self.settings)

    def export_figure(self, path: str) -> Path:
        """Write the current frame to an HTML file"""
        self._require_ready()
        output = Path(path)
        output.parent.mkdir(parents=True, exist_ok=True)
        try:
            fig = self.plot_generator.create_telemetry_figure(self.current_frame())
        except Exception as e:
            logger.error(f"Figure generation failed: {e}")
            fig = self.plot_generator._create_empty_plot(f"Error generating plot: {str(e)}")
        fig.write_html(str(output), include_plotlyjs='cdn')
        logger.info(f"Exported map to {output}")
        return output

    def get_status(self) -> Dict[str, Any]:
        self._require_ready()
        state = self.controller.state
        return {
            'running': self.is_running,
            'floats': len(self.store),
            'hovered': state.hovered_id,
            'selected': state.selected_id,
            'phase': state.animation_phase,
            'timer_running': self.timer is not None and self.timer.is_running,
            'dark_mode': self.dark_mode,
        }

    def format_legend(self) -> str:
        frame = self.current_frame()
        return "\n".join(f"  {entry.text}" for entry in frame.legend)

    def format_frame(self) -> str:
        frame = self.current_frame()
        lines = [f"Phase {frame.phase}"]
        for marker in frame.markers:
            flags = ''.join([
                'H' if marker.hovered else '-',
                'S' if marker.selected else '-',
            ])
            lines.append(
                f"  {marker.float_id} [{flags}] x={marker.x:6.2f} y={marker.display_y:6.2f} "
                f"r={marker.radius:.1f}"
            )
        lines.append(f"  {len(frame.ripples)} ripples, {len(frame.connectors)} connectors")
        if frame.details is not None:
            lines.append(f"Selected {frame.details.float_id} ({frame.details.region})")
            lines.extend(f"  {label}: {value}" for label, value in frame.details.rows)
        return "\n".join(lines)

    def handle_command(self, command: list) -> bool:
        """Apply one interactive command; returns False on exit"""
        cmd = command[0].lower()

        if cmd == 'exit':
            return False
        elif cmd == 'hover' and len(command) > 1:
            self.controller.pointer_enter(command[1])
        elif cmd == 'leave':
            self.controller.pointer_leave(command[1] if len(command) > 1 else None)
        elif cmd == 'select' and len(command) > 1:
            self.controller.click_id(command[1])
            selected = self.controller.state.selected_id
            print(f"Selected: {selected or 'none'}")
        elif cmd == 'dismiss':
            self.controller.dismiss()
        elif cmd == 'status':
            for key, value in self.get_status().items():
                print(f"{key}: {value}")
        elif cmd == 'legend':
            print("ARGO Float Status")
            print(self.format_legend())
        elif cmd == 'frame':
            print(self.format_frame())
        elif cmd == 'export' and len(command) > 1:
            print(f"Saved {self.export_figure(command[1])}")
        else:
            print("Unknown command")
        return True

    def run_interactive_mode(self):
        """Run interactive command-line mode"""
        print("=== ARGO Float Map - Interactive Mode ===")
        print("Commands: hover <id>, leave, select <id>, dismiss, status, legend, frame, export <path>, exit")
        print(f"Floats: {', '.join(self.store.ids())}")

        while self.is_running:
            try:
                command = input("\nfloatmap> ").strip().split()
                if not command:
                    continue
                if not self.handle_command(command):
                    break
            except (KeyboardInterrupt, EOFError):
                break
            except (FloatMapError, OSError) as e:
                print(f"Error: {e}")

        self.shutdown()

    def _signal_handler(self, signum, frame):
        """Handle shutdown signals gracefully"""
        logger.info(f"Received signal {signum}, shutting down...")
        self.shutdown()
        raise SystemExit(0)

    def install_signal_handlers(self):
        signal.signal(signal.SIGINT, self._signal_handler)
        signal.signal(signal.SIGTERM, self._signal_handler)

    def shutdown(self):
        """Stop the animation timer; safe to call more than once"""
        if self.timer is not None:
            self.timer.stop()
        if self.is_running:
            logger.info("Float map shutdown complete")
        self.is_running = False


def main(argv=None):
    """Main entry point with command-line interface"""
    parser = argparse.ArgumentParser(description='Live ARGO float telemetry map')
    parser.add_argument('--config', help='Path to configuration file')
    parser.add_argument('--dark', action='store_true', help='Use dark display mode')
    parser.add_argument('--export', help='Write the map figure to an HTML file and exit')
    parser.add_argument('--legend', action='store_true', help='Print the status legend and exit')

    args = parser.parse_args(argv)

    if args.config:
        config.load_config(args.config)

    setup_logging(config)

    system = FloatMapSystem(config, dark_mode=True if args.dark else None)
    system.install_signal_handlers()

    if not system.initialize_system():
        print("Float map initialization failed. Check logs for details.")
        return 1

    try:
        if args.legend:
            print("ARGO Float Status")
            print(system.format_legend())
            return 0

        if args.export:
            print(f"Saved {system.export_figure(args.export)}")
            return 0

        system.run_interactive_mode()
        return 0

    except (FloatMapError, OSError) as e:
        print(f"Error: {e}")
        return 1
    finally:
        system.shutdown()


if __name__ == "__main__":
    sys.exit(main())
