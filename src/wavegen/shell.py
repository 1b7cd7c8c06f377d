"""
Waveform Shell - Interactive CLI for configuring and plotting waveforms

A shell-like interface over the waveform core:

    SINE> sine 2 1 90deg       # f=2 Hz, A=1 V, phase=90 degrees
    SINE> am 1 10 0.5          # AM over the sine: Ac=1, fc=10 Hz, m=0.5
    SINE> square 1 2 0.25      # switch to square, duty 25%
    SQUARE> pwm 50             # PWM over the square at 50 Hz
    SQUARE> show               # current settings

Omitted arguments keep their current session value. Every waveform kind
remembers its own parameters for the whole session.

Usage:
    wavegen                                   # Interactive shell
    wavegen plot sine --frequency 2 --phase d:45
    wavegen plot square --modulation pwm --carrier-frequency 50
"""

import argparse
import os
import sys
from dataclasses import dataclass, field, replace
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from loguru import logger
from prompt_toolkit import PromptSession
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.formatted_text import HTML
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.styles import Style

from . import __version__
from .constants import ModulationDefaults
from .parsing import parse_number, parse_phase
from .render import CharacterSet
from .report import modulation_echo, modulation_report, settings_box, waveform_report
from .wavetables import (
    FrequencyError,
    ModulationRequest,
    ModulationType,
    Waveform,
    WaveKind,
    default_waveform,
    modulated_trace,
    trace,
)


# =============================================================================
# Shell State
# =============================================================================

@dataclass
class SessionState:
    """Mutable session state; the only state that outlives a command."""
    waves: Dict[WaveKind, Waveform] = field(
        default_factory=lambda: {kind: default_waveform(kind) for kind in WaveKind}
    )
    selected: WaveKind = WaveKind.SINE
    last_modulation: Optional[ModulationRequest] = None
    charset: CharacterSet = CharacterSet.ASCII

    @property
    def current(self) -> Waveform:
        """Waveform of the selected kind."""
        return self.waves[self.selected]


# =============================================================================
# Command Handlers
# =============================================================================

@dataclass
class CommandResult:
    """Result of a command execution."""
    success: bool
    message: str = ""
    exit: bool = False


# Positional argument layout per waveform command: (field, parser)
ArgSpec = Sequence[Tuple[str, Callable[[str], float]]]


def _number(name: str) -> Callable[[str], float]:
    return lambda text: parse_number(text, name)


WAVE_ARGS: Dict[WaveKind, ArgSpec] = {
    WaveKind.SINE: [
        ("frequency", _number("frequency")),
        ("amplitude", _number("amplitude")),
        ("phase", parse_phase),
    ],
    WaveKind.SQUARE: [
        ("frequency", _number("frequency")),
        ("amplitude", _number("amplitude")),
        ("duty_cycle", _number("duty cycle")),
    ],
    WaveKind.TRIANGLE: [
        ("frequency", _number("frequency")),
        ("amplitude", _number("amplitude")),
    ],
    WaveKind.SAWTOOTH: [
        ("amplitude", _number("jump amplitude")),
        ("slope", _number("slope")),
        ("frequency", _number("frequency")),
    ],
}

# (carrier_amplitude, carrier_frequency, index) argument order and defaults
MODULATION_ARGS: Dict[ModulationType, List[Tuple[str, float]]] = {
    ModulationType.AM: [
        ("carrier_amplitude", ModulationDefaults.AM_CARRIER_AMPLITUDE),
        ("carrier_frequency", ModulationDefaults.AM_CARRIER_FREQUENCY),
        ("index", ModulationDefaults.AM_INDEX),
    ],
    ModulationType.FM: [
        ("carrier_amplitude", ModulationDefaults.FM_CARRIER_AMPLITUDE),
        ("carrier_frequency", ModulationDefaults.FM_CARRIER_FREQUENCY),
        ("index", ModulationDefaults.FM_BETA),
    ],
    ModulationType.PWM: [
        ("carrier_frequency", ModulationDefaults.PWM_SWITCHING_FREQUENCY),
        ("carrier_amplitude", ModulationDefaults.PWM_OUTPUT_AMPLITUDE),
    ],
}


def _usage(name: str, spec: Sequence[Tuple[str, object]]) -> str:
    return f"Usage: {name} " + " ".join(f"[{field_name}]" for field_name, _ in spec)


class CommandHandler:
    """Parses commands and turns them into waveform reports."""

    def __init__(self, state: SessionState):
        self.state = state

        # Command registry: {command: (handler, help)}
        self.commands: Dict[str, Tuple[Callable[..., CommandResult], str]] = {
            "sine": (self.cmd_sine, "sine [freq] [amp] [phase]: configure and plot"),
            "square": (self.cmd_square, "square [freq] [amp] [duty]: configure and plot"),
            "triangle": (self.cmd_triangle, "triangle [freq] [amp]: configure and plot"),
            "sawtooth": (self.cmd_sawtooth, "sawtooth [jump_amp] [slope] [freq]: configure and plot"),
            "am": (self.cmd_am, "am [Ac] [fc] [m]: amplitude-modulate the current waveform"),
            "fm": (self.cmd_fm, "fm [Ac] [fc] [beta]: frequency-modulate the current waveform"),
            "pwm": (self.cmd_pwm, "pwm [fpwm] [Ac]: pulse-width-modulate the current waveform"),
            "show": (self.cmd_show, "Show current settings"),
            "help": (self.cmd_help, "Show available commands"),
            "quit": (self.cmd_quit, "Exit shell"),
        }

    def execute(self, command: str) -> CommandResult:
        """Execute one command line."""
        parts = command.strip().split()
        if not parts:
            return CommandResult(True)

        cmd_name = parts[0].lower()
        args = parts[1:]

        if cmd_name not in self.commands:
            return CommandResult(False, f"Unknown command: {cmd_name}")
        handler, _ = self.commands[cmd_name]
        logger.debug(f"Executing {cmd_name} {args}")
        return handler(*args)

    def get_completions(self) -> List[str]:
        return list(self.commands.keys())

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------

    def plot_waveform(self, wave: Waveform) -> CommandResult:
        """Settings, table and plot of a primary waveform."""
        lines = settings_box(wave)
        try:
            result = trace(wave)
        except FrequencyError as e:
            logger.debug(str(e))
            reason = "Frequency must be > 0!" if wave.frequency <= 0.0 else f"{e}!"
            return CommandResult(False, "\n".join(lines + ["", reason]))
        lines.append("")
        lines.extend(waveform_report(wave, result, self.state.charset))
        return CommandResult(True, "\n".join(lines))

    def plot_modulation(self, request: ModulationRequest) -> CommandResult:
        """Table and plot of a modulated waveform."""
        result = modulated_trace(request)
        lines = modulation_report(request, result, self.state.charset)
        return CommandResult(True, "\n".join(lines))

    # -------------------------------------------------------------------------
    # Waveform commands
    # -------------------------------------------------------------------------

    def _configure(self, kind: WaveKind, args: Sequence[str]) -> CommandResult:
        spec = WAVE_ARGS[kind]
        if len(args) > len(spec):
            return CommandResult(False, _usage(kind.value, spec))

        updates = {}
        try:
            for (field_name, parse), text in zip(spec, args):
                updates[field_name] = parse(text)
        except ValueError as e:
            return CommandResult(False, str(e))

        wave = replace(self.state.waves[kind], **updates)
        self.state.waves[kind] = wave
        self.state.selected = kind
        self.state.last_modulation = None
        logger.debug(f"Configured {wave}")
        return self.plot_waveform(wave)

    def cmd_sine(self, *args) -> CommandResult:
        """Configure and plot the sine."""
        return self._configure(WaveKind.SINE, args)

    def cmd_square(self, *args) -> CommandResult:
        """Configure and plot the square (duty cycle clamped to 0..1)."""
        return self._configure(WaveKind.SQUARE, args)

    def cmd_triangle(self, *args) -> CommandResult:
        return self._configure(WaveKind.TRIANGLE, args)

    def cmd_sawtooth(self, *args) -> CommandResult:
        return self._configure(WaveKind.SAWTOOTH, args)

    # -------------------------------------------------------------------------
    # Modulation commands
    # -------------------------------------------------------------------------

    def _modulate(self, mod_type: ModulationType, args: Sequence[str]) -> CommandResult:
        spec = MODULATION_ARGS[mod_type]
        if len(args) > len(spec):
            return CommandResult(False, _usage(mod_type.value, spec))

        values = {"index": 0.0}
        values.update({field_name: default for field_name, default in spec})
        try:
            for (field_name, _), text in zip(spec, args):
                values[field_name] = parse_number(text, field_name.replace("_", " "))
        except ValueError as e:
            return CommandResult(False, str(e))

        request = ModulationRequest(type=mod_type, base=self.state.current, **values)
        self.state.last_modulation = request
        return self.plot_modulation(request)

    def cmd_am(self, *args) -> CommandResult:
        return self._modulate(ModulationType.AM, args)

    def cmd_fm(self, *args) -> CommandResult:
        return self._modulate(ModulationType.FM, args)

    def cmd_pwm(self, *args) -> CommandResult:
        return self._modulate(ModulationType.PWM, args)

    # -------------------------------------------------------------------------
    # Common commands
    # -------------------------------------------------------------------------

    def cmd_show(self, *args) -> CommandResult:
        """Show current state."""
        lines = settings_box(self.state.current)
        request = self.state.last_modulation
        if request is not None:
            lines.append(f"Modulation: {request.type.label} ({modulation_echo(request)})")
        return CommandResult(True, "\n".join(lines))

    def cmd_help(self, *args) -> CommandResult:
        """Show available commands."""
        lines = ["Available commands:"]
        for cmd, (_, help_text) in sorted(self.commands.items()):
            lines.append(f"  {cmd:10s} - {help_text}")
        lines.append("")
        lines.append("  Phase accepts: 1.57  3.14/2  90deg  90d  d:90  r:1.57")
        return CommandResult(True, "\n".join(lines))

    def cmd_quit(self, *args) -> CommandResult:
        return CommandResult(True, "Goodbye!", exit=True)


# =============================================================================
# Shell UI
# =============================================================================

class WaveShell:
    """Interactive waveform shell using prompt_toolkit."""

    # Prompt styles per selected kind
    PROMPT_STYLES = {
        WaveKind.SINE: ("class:sine", "SINE> "),
        WaveKind.SQUARE: ("class:square", "SQUARE> "),
        WaveKind.TRIANGLE: ("class:triangle", "TRIANGLE> "),
        WaveKind.SAWTOOTH: ("class:sawtooth", "SAWTOOTH> "),
    }

    STYLE = Style.from_dict({
        "sine": "#00aa00 bold",
        "square": "#aa8800 bold",
        "triangle": "#0088aa bold",
        "sawtooth": "#aa00aa bold",
        "bottom-toolbar": "bg:#222222 #aaaaaa",
        "wave-indicator": "bg:#444444 #ffffff",
        "wave-params": "bg:#333333 #00ff00",
    })

    def __init__(self, charset: CharacterSet = CharacterSet.ASCII):
        self.state = SessionState(charset=charset)
        self.handler = CommandHandler(self.state)
        self.kb = self._create_key_bindings()
        self.completer = WordCompleter(self.handler.get_completions(), ignore_case=True)

        self.session = PromptSession(
            history=InMemoryHistory(),
            key_bindings=self.kb,
            style=self.STYLE,
            bottom_toolbar=self._get_bottom_toolbar,
        )

    def _create_key_bindings(self) -> KeyBindings:
        kb = KeyBindings()

        @kb.add('c-c')
        def _(event):
            """Ctrl+C -> drop the current line."""
            event.app.exit(exception=KeyboardInterrupt())

        @kb.add('c-d')
        def _(event):
            """Ctrl+D -> quit if buffer empty."""
            if not event.app.current_buffer.text:
                event.app.exit(exception=EOFError())

        return kb

    def _get_prompt(self):
        style_class, text = self.PROMPT_STYLES[self.state.selected]
        return [(style_class, text)]

    def _get_bottom_toolbar(self):
        wave = self.state.current
        mod = self.state.last_modulation
        mod_name = mod.type.label if mod is not None else "none"
        return HTML(
            f'<wave-indicator> {wave.kind.label:8s} </wave-indicator>'
            f'<wave-params> f={wave.frequency:g} Hz  A={wave.amplitude:g} </wave-params>'
            f'<wave-indicator> mod: {mod_name:4s} </wave-indicator>'
        )

    def run(self):
        """Run the interactive shell."""
        print(f"Waveform Shell v{__version__}")
        print("Type 'help' for commands, Ctrl+D to quit")
        print()
        logger.debug(f"Charset: {self.state.charset.value}")

        try:
            while True:
                try:
                    text = self.session.prompt(
                        self._get_prompt(),
                        completer=self.completer,
                    )
                except KeyboardInterrupt:
                    print("^C")
                    continue

                result = self.handler.execute(text)
                if result.message:
                    print(result.message)
                if result.exit:
                    break
        except EOFError:
            print("\nGoodbye!")


# =============================================================================
# Main
# =============================================================================

def configure_logging(verbose: bool = False):
    """Route loguru to stderr; WAVEGEN_LOG_LEVEL overrides the flag."""
    level = os.getenv("WAVEGEN_LOG_LEVEL", "DEBUG" if verbose else "INFO")
    logger.remove()
    logger.add(
        sys.stderr,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <level>{message}</level>",
        level=level.upper(),
        colorize=True,
    )


def _option(parse: Callable[[str], float]) -> Callable[[str], float]:
    """Adapt a parser to argparse so its message reaches the usage error."""
    def convert(text: str) -> float:
        try:
            return parse(text)
        except ValueError as e:
            raise argparse.ArgumentTypeError(str(e)) from None
    return convert


# Waveform options and the only kind each one applies to
KIND_OPTIONS = {
    "phase": WaveKind.SINE,
    "duty": WaveKind.SQUARE,
    "slope": WaveKind.SAWTOOTH,
}

CARRIER_OPTIONS = ("carrier_amplitude", "carrier_frequency", "index")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wavegen",
        description="Waveform Shell - configure, modulate and plot periodic waveforms"
    )
    parser.add_argument(
        "--charset",
        choices=[c.value for c in CharacterSet],
        default=CharacterSet.ASCII.value,
        help="Plot marker set (default: ascii)"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging output"
    )

    subparsers = parser.add_subparsers(dest="command")
    plot = subparsers.add_parser("plot", help="Plot one waveform and exit")
    plot.add_argument("kind", choices=[k.value for k in WaveKind])
    plot.add_argument("--frequency", "-f", type=_option(_number("frequency")), help="Frequency (Hz)")
    plot.add_argument("--amplitude", "-a", type=_option(_number("amplitude")), help="Amplitude (V)")
    plot.add_argument("--phase", "-p", type=_option(parse_phase), help="Sine phase (e.g. 1.57, 90deg, d:90)")
    plot.add_argument("--duty", type=_option(_number("duty cycle")), help="Square duty cycle (0..1)")
    plot.add_argument("--slope", type=_option(_number("slope")), help="Sawtooth slope")
    plot.add_argument(
        "--modulation", "-m",
        choices=[m.value for m in ModulationType],
        help="Apply modulation over the waveform"
    )
    plot.add_argument("--carrier-amplitude", type=_option(_number("carrier amplitude")),
                      help="Carrier amplitude Ac")
    plot.add_argument("--carrier-frequency", type=_option(_number("carrier frequency")),
                      help="Carrier frequency fc / fpwm (Hz)")
    plot.add_argument("--index", type=_option(_number("index")), help="AM index m or FM beta")
    return parser


def check_plot_args(parser: argparse.ArgumentParser, args: argparse.Namespace):
    """Reject plot options that do not apply to the chosen kind or modulation."""
    kind = WaveKind(args.kind)
    for option, owner in KIND_OPTIONS.items():
        if getattr(args, option) is not None and kind != owner:
            parser.error(f"--{option} applies to {owner.value} only, not {kind.value}")

    if args.modulation is None:
        for option in CARRIER_OPTIONS:
            if getattr(args, option) is not None:
                parser.error(f"--{option.replace('_', '-')} requires --modulation")
    elif ModulationType(args.modulation) == ModulationType.PWM and args.index is not None:
        parser.error("--index does not apply to pwm")


def run_plot(args: argparse.Namespace, charset: CharacterSet) -> int:
    """Non-interactive plot; returns a process exit code."""
    handler = CommandHandler(SessionState(charset=charset))
    kind = WaveKind(args.kind)

    updates = {
        "frequency": args.frequency,
        "amplitude": args.amplitude,
        "phase": args.phase,
        "duty_cycle": args.duty,
        "slope": args.slope,
    }
    wave = replace(default_waveform(kind), **{k: v for k, v in updates.items() if v is not None})

    result = handler.plot_waveform(wave)
    print(result.message)
    if not result.success or args.modulation is None:
        return 0 if result.success else 1

    mod_type = ModulationType(args.modulation)
    values = {"index": 0.0}
    values.update({name: default for name, default in MODULATION_ARGS[mod_type]})
    values.update({k: getattr(args, k) for k in CARRIER_OPTIONS if getattr(args, k) is not None})

    print()
    print(handler.plot_modulation(ModulationRequest(type=mod_type, base=wave, **values)).message)
    return 0


def main(argv: Optional[Sequence[str]] = None):
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)
    charset = CharacterSet(args.charset)

    if args.command == "plot":
        check_plot_args(parser, args)
        sys.exit(run_plot(args, charset))

    WaveShell(charset=charset).run()


if __name__ == "__main__":
    main()
