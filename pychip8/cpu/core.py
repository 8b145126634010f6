"""Core CHIP-8 interpreter."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import List, Sequence

from pychip8.bus import Memory
from pychip8.io import Keypad
from pychip8.utils import debug_enabled, debug_log
from pychip8.video import FONT_START, Framebuffer, glyph_address

from .errors import (
    AddressError,
    CPUError,
    IllegalOpcodeError,
    StackOverflowError,
    StackUnderflowError,
)
from .opcodes import OPCODE_TABLE, DecodedInstruction, Family, lookup
from .stack import DEFAULT_STACK_SIZE, CallStack

__all__ = [
    "AddressError",
    "CPUError",
    "CPUState",
    "Chip8CPU",
    "IllegalOpcodeError",
    "Quirks",
    "StackOverflowError",
    "StackUnderflowError",
    "FLAG_REGISTER",
    "PROGRAM_START",
    "REGISTER_COUNT",
]


PROGRAM_START = 0x200
REGISTER_COUNT = 16
FLAG_REGISTER = 0xF


@dataclass
class Quirks:
    """Behaviour switches for historically divergent instructions."""

    # SHR/SHL read Vy and store into Vx (COSMAC VIP) instead of shifting Vx in place.
    shift_uses_vy: bool = False


@dataclass
class CPUState:
    """Snapshot of the CHIP-8 register file."""

    v: List[int] = field(default_factory=lambda: [0] * REGISTER_COUNT)
    i: int = 0x0000
    pc: int = PROGRAM_START
    sp: int = DEFAULT_STACK_SIZE
    delay_timer: int = 0x00
    sound_timer: int = 0x00

    def clone(self) -> "CPUState":
        return CPUState(list(self.v), self.i, self.pc, self.sp, self.delay_timer, self.sound_timer)


@dataclass
class Chip8CPU:
    """Fetch-decode-execute engine over memory, stack, framebuffer and keypad."""

    memory: Memory
    framebuffer: Framebuffer = field(default_factory=Framebuffer)
    keypad: Keypad = field(default_factory=Keypad)
    stack: CallStack = field(default_factory=CallStack)
    quirks: Quirks = field(default_factory=Quirks)
    seed: int | None = None
    instruction_table: Sequence[Family] = field(default=OPCODE_TABLE)

    state: CPUState = field(init=False)
    cycle_count: int = field(default=0, init=False)
    awaiting_register: int | None = field(default=None, init=False)
    last_instruction: DecodedInstruction | None = field(default=None, init=False)
    halted: bool = field(default=False, init=False)

    def __post_init__(self) -> None:
        self.state = CPUState(sp=self.stack.empty_pointer)
        self._random = random.Random(self.seed)

    @property
    def awaiting_key(self) -> bool:
        """True while LD Vx, K is holding execution for a key press."""

        return self.awaiting_register is not None

    def reset(self) -> None:
        """Clear memory, stack, registers and display; restart at 0x200."""

        self.memory.clear()
        self.stack.clear()
        self.framebuffer.clear()
        self.state = CPUState(sp=self.stack.empty_pointer)
        self.cycle_count = 0
        self.awaiting_register = None
        self.last_instruction = None
        self.halted = False
        self._random.seed(self.seed)

    def step(self) -> int:
        """Execute a single instruction; return 1, or 0 while halted or awaiting a key."""

        if self.halted:
            return 0

        if self.awaiting_register is not None:
            if debug_enabled("cpu"):
                debug_log("cpu", "await key pc=%03x V%X", self.state.pc, self.awaiting_register)
            return 0

        pc_before = self.state.pc
        try:
            word = self._fetch_word()
            decoded = self._decode(pc_before, word)
            if debug_enabled("cpu"):
                debug_log("cpu", "pc=%03x word=%04x %s", pc_before, word, decoded.disassemble())

            handler = getattr(self, decoded.instruction.handler, None)
            if handler is None:
                raise IllegalOpcodeError(f"handler '{decoded.instruction.handler}' not implemented")

            self.last_instruction = decoded
            handler(decoded)
        except CPUError:
            # Leave pc on the faulting word; nothing runs until reset().
            self.state.pc = pc_before
            self.halted = True
            if debug_enabled("cpu"):
                debug_log("cpu", "halted at pc=%03x", pc_before)
            raise
        self.cycle_count += 1
        return 1

    def run(self, max_steps: int) -> int:
        """Step until ``max_steps`` instructions ran or a key wait begins."""

        executed = 0
        while executed < max_steps:
            if self.step() == 0:
                break
            executed += 1
        return executed

    def tick_timers(self) -> None:
        """Decrement both timers by one, stopping at zero."""

        if self.state.delay_timer > 0:
            self.state.delay_timer -= 1
        if self.state.sound_timer > 0:
            self.state.sound_timer -= 1

    def key_pressed(self, key: int) -> bool:
        """Complete a pending LD Vx, K with ``key``; return True if one was pending."""

        if not 0 <= key <= 0xF:
            raise ValueError(f"key index out of range: {key}")
        register = self.awaiting_register
        if register is None:
            return False
        self.state.v[register] = key
        self.state.pc = (self.state.pc + 2) & 0xFFFF
        self.awaiting_register = None
        if debug_enabled("cpu"):
            debug_log("cpu", "key %X resumes pc=%03x", key, self.state.pc)
        return True

    def on_key_event(self, key: int, pressed: bool) -> None:
        """Keypad listener hook."""

        if pressed:
            self.key_pressed(key)

    # ------------------------------------------------------------------
    # Flow control

    def op_sys(self, decoded: DecodedInstruction) -> None:
        if debug_enabled("cpu"):
            debug_log("cpu", "ignoring SYS %03x", decoded.nnn)

    def op_cls(self, _: DecodedInstruction) -> None:
        self.framebuffer.clear()

    def op_ret(self, _: DecodedInstruction) -> None:
        address, self.state.sp = self.stack.pop(self.state.sp)
        self.state.pc = address

    def op_jp(self, decoded: DecodedInstruction) -> None:
        self._jump(decoded.nnn)

    def op_call(self, decoded: DecodedInstruction) -> None:
        self._check_range(decoded.nnn)
        self.state.sp = self.stack.push(self.state.sp, self.state.pc)
        self._jump(decoded.nnn)

    def op_jp_v0(self, decoded: DecodedInstruction) -> None:
        self._jump(self.state.v[0] + decoded.nnn)

    def op_se_byte(self, decoded: DecodedInstruction) -> None:
        if self.state.v[decoded.x] == decoded.kk:
            self._skip()

    def op_sne_byte(self, decoded: DecodedInstruction) -> None:
        if self.state.v[decoded.x] != decoded.kk:
            self._skip()

    def op_se_register(self, decoded: DecodedInstruction) -> None:
        if self.state.v[decoded.x] == self.state.v[decoded.y]:
            self._skip()

    def op_sne_register(self, decoded: DecodedInstruction) -> None:
        if self.state.v[decoded.x] != self.state.v[decoded.y]:
            self._skip()

    def op_skp(self, decoded: DecodedInstruction) -> None:
        if self.keypad.is_pressed(self.state.v[decoded.x] & 0xF):
            self._skip()

    def op_sknp(self, decoded: DecodedInstruction) -> None:
        if not self.keypad.is_pressed(self.state.v[decoded.x] & 0xF):
            self._skip()

    # ------------------------------------------------------------------
    # Register arithmetic and logic

    def op_ld_byte(self, decoded: DecodedInstruction) -> None:
        self._set_register(decoded.x, decoded.kk)

    def op_add_byte(self, decoded: DecodedInstruction) -> None:
        self._set_register(decoded.x, self.state.v[decoded.x] + decoded.kk)

    def op_ld_register(self, decoded: DecodedInstruction) -> None:
        self._set_register(decoded.x, self.state.v[decoded.y])

    def op_or(self, decoded: DecodedInstruction) -> None:
        self._set_register(decoded.x, self.state.v[decoded.x] | self.state.v[decoded.y])

    def op_and(self, decoded: DecodedInstruction) -> None:
        self._set_register(decoded.x, self.state.v[decoded.x] & self.state.v[decoded.y])

    def op_xor(self, decoded: DecodedInstruction) -> None:
        self._set_register(decoded.x, self.state.v[decoded.x] ^ self.state.v[decoded.y])

    def op_add_register(self, decoded: DecodedInstruction) -> None:
        total = self.state.v[decoded.x] + self.state.v[decoded.y]
        self._set_flag(total > 0xFF)
        self._set_register(decoded.x, total)

    def op_sub(self, decoded: DecodedInstruction) -> None:
        result = self._subtract(self.state.v[decoded.x], self.state.v[decoded.y])
        self._set_register(decoded.x, result)

    def op_subn(self, decoded: DecodedInstruction) -> None:
        result = self._subtract(self.state.v[decoded.y], self.state.v[decoded.x])
        self._set_register(decoded.x, result)

    def op_shr(self, decoded: DecodedInstruction) -> None:
        value = self._shift_source(decoded)
        self._set_flag(value & 0x01)
        self._set_register(decoded.x, value >> 1)

    def op_shl(self, decoded: DecodedInstruction) -> None:
        value = self._shift_source(decoded)
        self._set_flag((value >> 7) & 0x01)
        self._set_register(decoded.x, value << 1)

    def op_rnd(self, decoded: DecodedInstruction) -> None:
        self._set_register(decoded.x, self._random.randrange(0x100) & decoded.kk)

    # ------------------------------------------------------------------
    # Address register and memory

    def op_ld_index(self, decoded: DecodedInstruction) -> None:
        self.state.i = decoded.nnn

    def op_add_index(self, decoded: DecodedInstruction) -> None:
        self.state.i = (self.state.i + self.state.v[decoded.x]) & 0xFFFF

    def op_ld_font(self, decoded: DecodedInstruction) -> None:
        self.state.i = glyph_address(self.state.v[decoded.x], base=FONT_START)

    def op_ld_bcd(self, decoded: DecodedInstruction) -> None:
        value = self.state.v[decoded.x]
        base = self.state.i
        self._check_range(base, 3)
        self._write_byte(base, value // 100)
        self._write_byte(base + 1, (value // 10) % 10)
        self._write_byte(base + 2, value % 10)

    def op_store_registers(self, decoded: DecodedInstruction) -> None:
        base = self.state.i
        self._check_range(base, decoded.x + 1)
        for index in range(decoded.x + 1):
            self._write_byte(base + index, self.state.v[index])

    def op_load_registers(self, decoded: DecodedInstruction) -> None:
        base = self.state.i
        self._check_range(base, decoded.x + 1)
        for index in range(decoded.x + 1):
            self._set_register(index, self._read_byte(base + index))

    # ------------------------------------------------------------------
    # Timers and input

    def op_ld_from_delay(self, decoded: DecodedInstruction) -> None:
        self._set_register(decoded.x, self.state.delay_timer)

    def op_ld_delay(self, decoded: DecodedInstruction) -> None:
        self.state.delay_timer = self.state.v[decoded.x]

    def op_ld_sound(self, decoded: DecodedInstruction) -> None:
        self.state.sound_timer = self.state.v[decoded.x]

    def op_ld_key(self, decoded: DecodedInstruction) -> None:
        # Hold pc on this instruction until key_pressed() resumes execution.
        self.state.pc = decoded.address
        self.awaiting_register = decoded.x

    # ------------------------------------------------------------------
    # Display

    def op_drw(self, decoded: DecodedInstruction) -> None:
        base = self.state.i
        self._check_range(base, decoded.n)
        sprite = [self._read_byte(base + row) for row in range(decoded.n)]
        collision = self.framebuffer.draw_sprite(
            self.state.v[decoded.x],
            self.state.v[decoded.y],
            sprite,
        )
        self._set_flag(collision)

    # ------------------------------------------------------------------
    # Fetch and decode

    def _fetch_word(self) -> int:
        pc = self.state.pc
        self._check_range(pc, 2)
        word = self.memory.load16(pc)
        self.state.pc = (pc + 2) & 0xFFFF
        return word

    def _decode(self, address: int, word: int) -> DecodedInstruction:
        instruction = lookup(self.instruction_table, word)
        if instruction is None:
            raise IllegalOpcodeError(f"illegal opcode {word:#06x} at {address:#05x}")
        return DecodedInstruction(address, word, instruction)

    # ------------------------------------------------------------------
    # Memory helpers

    def _check_range(self, address: int, length: int = 1) -> None:
        if length <= 0:
            return
        memory = self.memory
        if not (memory.contains(address) and memory.contains(address + length - 1)):
            raise AddressError(
                f"address range {address:#06x}+{length} outside memory "
                f"({memory.get_start_address():#05x}-{memory.get_end_address():#05x})"
            )

    def _read_byte(self, address: int) -> int:
        self._check_range(address)
        return self.memory.load8(address)

    def _write_byte(self, address: int, value: int) -> None:
        self._check_range(address)
        self.memory.store8(address, value)

    # ------------------------------------------------------------------
    # Register helpers

    def _set_register(self, index: int, value: int) -> None:
        self.state.v[index] = value & 0xFF

    def _set_flag(self, enabled: int | bool) -> None:
        self.state.v[FLAG_REGISTER] = 1 if enabled else 0

    def _subtract(self, minuend: int, subtrahend: int) -> int:
        self._set_flag(minuend > subtrahend)
        return (minuend - subtrahend) & 0xFF

    def _shift_source(self, decoded: DecodedInstruction) -> int:
        if self.quirks.shift_uses_vy:
            return self.state.v[decoded.y]
        return self.state.v[decoded.x]

    def _jump(self, target: int) -> None:
        self._check_range(target)
        self.state.pc = target

    def _skip(self) -> None:
        self.state.pc = (self.state.pc + 2) & 0xFFFF
