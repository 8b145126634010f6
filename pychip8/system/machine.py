"""CHIP-8 machine assembly."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from pychip8.bus import Memory
from pychip8.cpu import DEFAULT_STACK_SIZE, CallStack, Chip8CPU, Quirks
from pychip8.io import Keypad
from pychip8.loader import ProgramImage, load_program_bytes
from pychip8.video import Framebuffer, install_font


@dataclass
class MachineConfig:
    """Runtime configuration for the CHIP-8 machine."""

    stack_size: int = DEFAULT_STACK_SIZE
    seed: Optional[int] = None
    quirks: Quirks = field(default_factory=Quirks)
    program_image: Optional[bytes] = None
    program_name: str = ""


@dataclass
class Machine:
    """Aggregates the core components of a CHIP-8 system."""

    memory: Memory
    cpu: Chip8CPU
    framebuffer: Framebuffer
    keypad: Keypad
    program: ProgramImage | None = None

    def load(self, data: bytes, *, name: str = "") -> ProgramImage:
        self.program = load_program_bytes(data, self.cpu, name=name)
        return self.program

    def reset(self) -> None:
        """Reset state while keeping the font resident."""

        self.cpu.reset()
        install_font(self.memory)
        self.program = None

    def tick(self) -> None:
        """One 60 Hz timer tick."""

        self.cpu.tick_timers()

    @property
    def sound_active(self) -> bool:
        return self.cpu.state.sound_timer > 0


def create_machine(config: MachineConfig | None = None) -> Machine:
    """Instantiate a CHIP-8 machine with the requested configuration."""

    config = config or MachineConfig()

    memory = Memory()
    framebuffer = Framebuffer()
    keypad = Keypad()
    cpu = Chip8CPU(
        memory,
        framebuffer=framebuffer,
        keypad=keypad,
        stack=CallStack(config.stack_size),
        quirks=config.quirks,
        seed=config.seed,
    )
    keypad.add_listener(cpu.on_key_event)

    machine = Machine(memory=memory, cpu=cpu, framebuffer=framebuffer, keypad=keypad)
    if config.program_image is not None:
        machine.load(config.program_image, name=config.program_name)
    else:
        machine.reset()
    return machine
