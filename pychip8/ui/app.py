"""Pygame frontend driving the CHIP-8 interpreter at 60 Hz."""

from __future__ import annotations

import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from pychip8.audio import SquareWaveBeeper
from pychip8.cpu import CPUError, Quirks
from pychip8.cpu.opcodes import disassemble
from pychip8.loader import ProgramFormatError, load_program_from_path
from pychip8.system import Machine, MachineConfig, create_machine
from pychip8.utils import TraceRecorder, debug_enabled, debug_log
from pychip8.video import Renderer


@dataclass
class AppConfig:
    """Configuration for the CHIP-8 emulator frontend."""

    program_path: Optional[Path] = None
    scale: int = 10
    cycles_per_frame: int = 10
    seed: Optional[int] = None
    shift_quirk: bool = False
    fullscreen: bool = False


class Chip8App:
    """Thin wrapper around the Pygame event loop."""

    def __init__(self, config: AppConfig) -> None:
        if config.scale <= 0:
            raise ValueError("scale must be positive")
        if config.cycles_per_frame <= 0:
            raise ValueError("cycles_per_frame must be positive")
        self._config = config
        self._running = False
        self._machine: Machine | None = None
        self._beeper: SquareWaveBeeper | None = None
        self._pygame = None
        self._perf_enabled = debug_enabled("perf")
        self._perf_frame = 0
        self._trace_recorder: TraceRecorder | None = None
        if debug_enabled("trace"):
            self._trace_recorder = TraceRecorder(512)

    @property
    def machine(self) -> Machine | None:
        return self._machine

    def run(self) -> None:
        try:
            import pygame  # type: ignore
        except Exception as exc:  # pragma: no cover - optional dependency
            raise RuntimeError("pygame is required to run the UI") from exc

        if self._config.program_path is None:
            raise RuntimeError("program image is required; pass --program <path>")

        pygame.mixer.pre_init(44_100, -16, 1, 512)
        pygame.init()
        pygame.display.set_caption("CHIP-8")
        self._pygame = pygame
        self._init_audio(pygame)

        machine = self._create_machine(self._config.program_path)
        self._machine = machine
        renderer = Renderer()

        width = machine.framebuffer.width * self._config.scale
        height = machine.framebuffer.height * self._config.scale
        flags = pygame.FULLSCREEN if self._config.fullscreen else 0
        screen = pygame.display.set_mode((width, height), flags)

        clock = pygame.time.Clock()
        last_revision = -1
        self._running = True

        try:
            while self._running:
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        self._running = False
                    elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                        self._enter_debug_shell(machine)
                    elif event.type == pygame.KEYDOWN:
                        self._handle_key_event(pygame, event.key, pressed=True)
                    elif event.type == pygame.KEYUP:
                        self._handle_key_event(pygame, event.key, pressed=False)

                frame_start = time.perf_counter()
                executed = self._step_cpu(machine)
                machine.tick()

                if self._beeper is not None:
                    self._beeper.set_active(machine.sound_active)

                revision = machine.framebuffer.revision
                if revision != last_revision:
                    frame = renderer.render(machine.framebuffer, scale=self._config.scale)
                    screen.blit(frame.to_surface(), (0, 0))
                    pygame.display.flip()
                    last_revision = revision

                if self._perf_enabled:
                    self._perf_frame += 1
                    debug_log(
                        "perf",
                        "frame=%d executed=%d frame_ms=%.3f",
                        self._perf_frame,
                        executed,
                        (time.perf_counter() - frame_start) * 1000.0,
                    )

                clock.tick(_FRAME_RATE)
        finally:
            if self._beeper is not None:
                self._beeper.shutdown()
            pygame.quit()

    def _init_audio(self, pygame) -> None:
        if pygame.mixer.get_init() is None:
            try:
                pygame.mixer.init(44_100, -16, 1)
            except pygame.error as exc:  # pragma: no cover - best-effort path
                if debug_enabled("audio"):
                    debug_log("audio", "mixer_init_failed=%s", exc)
                return

        mixer_state = pygame.mixer.get_init()
        if mixer_state is None:
            if debug_enabled("audio"):
                debug_log("audio", "mixer_unavailable")
            return
        try:
            self._beeper = SquareWaveBeeper(sample_rate=mixer_state[0])
        except RuntimeError as exc:
            self._beeper = None
            if debug_enabled("audio"):
                debug_log("audio", "beeper_init_failed=%s", exc)

    def _create_machine(self, program_path: Path) -> Machine:
        config = MachineConfig(
            seed=self._config.seed,
            quirks=Quirks(shift_uses_vy=self._config.shift_quirk),
        )
        machine = create_machine(config)
        try:
            machine.program = load_program_from_path(program_path, machine.cpu)
        except (OSError, ProgramFormatError) as exc:
            raise RuntimeError(f"Failed to load program {program_path}: {exc}") from exc
        return machine

    def _handle_key_event(self, pygame, key_code: int, *, pressed: bool) -> None:
        machine = self._machine
        if machine is None:
            return
        name = pygame.key.name(key_code)
        canonical = canonical_key_name(name)
        if debug_enabled("input"):
            debug_log("input", "event=%s canonical=%s pressed=%s", name, canonical, pressed)
        if canonical is None:
            return
        if pressed:
            machine.keypad.press_name(canonical)
        else:
            machine.keypad.release_name(canonical)

    def _step_cpu(self, machine: Machine) -> int:
        cpu = machine.cpu
        trace = self._trace_recorder
        executed = 0
        pc_before = cpu.state.pc
        try:
            while executed < self._config.cycles_per_frame:
                pc_before = cpu.state.pc
                if trace is not None:
                    state_before = cpu.state.clone()
                    word = None if cpu.awaiting_key else _peek_word(machine, state_before.pc)
                    mnemonic = "" if word is None else disassemble(word)
                if cpu.step() == 0:
                    break
                if trace is not None:
                    trace.record_step(state_before, word, mnemonic=mnemonic, awaiting_key=cpu.awaiting_key)
                executed += 1
        except CPUError as exc:
            self._running = False
            if trace is not None:
                trace.dump("trace", limit=64)
            raise RuntimeError(f"CHIP-8 fault at pc={pc_before:03X}: {exc}") from exc
        return executed

    # ------------------------------------------------------------------
    # Debug shell

    def _enter_debug_shell(self, machine: Machine) -> None:
        print("\n=== CHIP-8 Debug Menu ===")
        print("Enter command: [c]pu, [s]tack, [m]em <addr> <len>, [t]race, [q]uit, [Enter] resume")

        paused = True
        while paused and self._running:
            try:
                command = input("debug> ").strip().lower()
            except (EOFError, KeyboardInterrupt):
                print("Resuming emulator.")
                break

            if command == "" or command == "resume":
                paused = False
            elif command in {"c", "cpu"}:
                self._dump_cpu(machine)
            elif command in {"s", "stack"}:
                self._dump_stack(machine)
            elif command in {"t", "trace"}:
                self._dump_trace()
            elif command.startswith("m"):
                arguments = command[1:].strip()
                self._dump_memory(machine, arguments if arguments else None)
            elif command in {"q", "quit", "exit"}:
                print("Exiting emulator.")
                self._running = False
                paused = False
            else:
                print("Commands: [Enter]=resume, [c]pu, [s]tack, [m]em, [t]race, [q]uit")

        if self._pygame is not None:
            self._pygame.event.clear()

    def _dump_cpu(self, machine: Machine) -> None:
        state = machine.cpu.state
        registers = " ".join(f"V{index:X}={value:02X}" for index, value in enumerate(state.v))
        print(
            f"CPU PC={state.pc:03X} I={state.i:04X} SP={state.sp:02X} "
            f"DT={state.delay_timer:02X} ST={state.sound_timer:02X}"
        )
        print(registers)
        if machine.cpu.awaiting_key:
            print(f"Awaiting key for V{machine.cpu.awaiting_register:X}")
        if machine.cpu.halted:
            print("Halted; reset required")

    def _dump_stack(self, machine: Machine) -> None:
        cpu = machine.cpu
        sp = cpu.state.sp
        depth = cpu.stack.depth(sp)
        if depth == 0:
            print("Call stack empty")
            return
        for slot in range(sp, cpu.stack.capacity):
            print(f"[{slot:02X}] {cpu.stack[slot]:03X}")

    def _dump_trace(self, limit: int = 64) -> None:
        if self._trace_recorder is None:
            print("Tracing disabled; set CHIP8_DEBUG=trace")
            return
        for line in self._trace_recorder.format_entries(limit):
            print(line)

    def _dump_memory(self, machine: Machine, arguments: str | None = None) -> None:
        def parse_value(text: str, default: int) -> int:
            try:
                return int(text, 16)
            except ValueError:
                return default

        start = machine.cpu.state.i
        length = 0x40
        if arguments:
            parts = arguments.split()
            start = parse_value(parts[0], start)
            if len(parts) > 1:
                length = parse_value(parts[1], length)

        memory = machine.memory
        last = memory.get_end_address()
        start = max(memory.get_start_address(), min(start, last))
        end = min(start + max(length, 0), last + 1)
        for addr in range(start, end, 16):
            chunk = [memory.load8(addr + offset) for offset in range(16) if addr + offset < end]
            hex_part = " ".join(f"{value:02X}" for value in chunk)
            print(f"{addr:03X}: {hex_part}")


def canonical_key_name(name: str) -> str | None:
    """Normalise a pygame key name to the keypad's host layout names."""

    lowered = name.lower()
    if len(lowered) == 3 and lowered.startswith("[") and lowered.endswith("]"):
        lowered = lowered[1]
    if len(lowered) == 1:
        return lowered
    if lowered in {"up", "down", "left", "right"}:
        return lowered
    return None


def _peek_word(machine: Machine, address: int) -> int | None:
    memory = machine.memory
    if address < 0 or address + 1 > memory.get_end_address():
        return None
    return memory.load16(address)


_FRAME_RATE = 60
