"""Opcode metadata for the CHIP-8 instruction set.

Instructions are declared as ``(pattern, mask)`` records and assembled into a
16-entry table indexed by the top nibble of the word. Families that share a
top nibble sub-dispatch on a selector field (low 12 bits, low nibble or low
byte, see ``FAMILY_SELECTORS``).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Final, Iterable, List, Mapping, Sequence


FAMILY_SELECTORS: Final[Mapping[int, int]] = {
    0x0: 0x0FFF,
    0x5: 0x000F,
    0x8: 0x000F,
    0x9: 0x000F,
    0xE: 0x00FF,
    0xF: 0x00FF,
}


def operand_x(word: int) -> int:
    return (word >> 8) & 0xF


def operand_y(word: int) -> int:
    return (word >> 4) & 0xF


def operand_n(word: int) -> int:
    return word & 0xF


def operand_kk(word: int) -> int:
    return word & 0xFF


def operand_nnn(word: int) -> int:
    return word & 0x0FFF


@dataclass(frozen=True)
class Instruction:
    """Metadata describing a single CHIP-8 instruction form."""

    pattern: int
    mask: int
    mnemonic: str
    handler: str
    operands: str = ""

    def __post_init__(self) -> None:
        if not 0 <= self.pattern <= 0xFFFF:
            raise ValueError(f"pattern out of range: {self.pattern:#x}")
        if self.mask & 0xF000 != 0xF000:
            raise ValueError(f"mask {self.mask:#06x} must cover the family nibble")
        if self.pattern & ~self.mask & 0xFFFF:
            raise ValueError(f"pattern {self.pattern:#06x} has bits outside mask {self.mask:#06x}")

    @property
    def family(self) -> int:
        return (self.pattern >> 12) & 0xF

    def matches(self, word: int) -> bool:
        return (word & self.mask) == self.pattern

    def format(self, word: int) -> str:
        if not self.operands:
            return self.mnemonic
        text = self.operands.format(
            x=operand_x(word),
            y=operand_y(word),
            n=operand_n(word),
            kk=operand_kk(word),
            nnn=operand_nnn(word),
        )
        return f"{self.mnemonic} {text}"


@dataclass(frozen=True)
class Family:
    """All instructions sharing one top nibble."""

    selector_mask: int = 0x0000
    entries: Mapping[int, Instruction] = field(default_factory=dict)
    default: Instruction | None = None

    def lookup(self, word: int) -> Instruction | None:
        instruction = self.entries.get(word & self.selector_mask)
        if instruction is not None:
            return instruction
        return self.default


@dataclass(frozen=True)
class DecodedInstruction:
    """An instruction word bound to the metadata that handles it."""

    address: int
    word: int
    instruction: Instruction

    @property
    def x(self) -> int:
        return operand_x(self.word)

    @property
    def y(self) -> int:
        return operand_y(self.word)

    @property
    def n(self) -> int:
        return operand_n(self.word)

    @property
    def kk(self) -> int:
        return operand_kk(self.word)

    @property
    def nnn(self) -> int:
        return operand_nnn(self.word)

    @property
    def mnemonic(self) -> str:
        return self.instruction.mnemonic

    def disassemble(self) -> str:
        return self.instruction.format(self.word)


class OpcodeTable:
    """Mutable builder for the 16-family instruction table."""

    _TABLE_SIZE: Final[int] = 0x10

    def __init__(self) -> None:
        self._entries: List[Dict[int, Instruction]] = [{} for _ in range(self._TABLE_SIZE)]
        self._defaults: List[Instruction | None] = [None] * self._TABLE_SIZE

    def register(self, instruction: Instruction) -> None:
        family = instruction.family
        selector = FAMILY_SELECTORS.get(family, 0x0000)
        if instruction.mask == 0xF000 and selector:
            existing = self._defaults[family]
            if existing is not None:
                raise ValueError(f"family {family:#x} default already registered as {existing.mnemonic}")
            self._defaults[family] = instruction
            return
        if instruction.mask != 0xF000 | selector:
            raise ValueError(
                f"{instruction.mnemonic} mask {instruction.mask:#06x} does not match family selector {selector:#06x}"
            )
        key = instruction.pattern & selector
        entries = self._entries[family]
        if key in entries:
            raise ValueError(f"pattern {instruction.pattern:#06x} already registered as {entries[key].mnemonic}")
        entries[key] = instruction

    def register_all(self, instructions: Iterable[Instruction]) -> None:
        for instruction in instructions:
            self.register(instruction)

    def freeze(self) -> Sequence[Family]:
        return tuple(
            Family(FAMILY_SELECTORS.get(family, 0x0000), dict(self._entries[family]), self._defaults[family])
            for family in range(self._TABLE_SIZE)
        )


def build_instruction_table(instructions: Iterable[Instruction]) -> Sequence[Family]:
    """Build the 16-entry family lookup table."""

    table = OpcodeTable()
    table.register_all(instructions)
    return table.freeze()


def lookup(table: Sequence[Family], word: int) -> Instruction | None:
    return table[(word >> 12) & 0xF].lookup(word & 0xFFFF)


DEFAULT_INSTRUCTIONS: Sequence[Instruction] = (
    # System and flow control
    Instruction(0x00E0, 0xFFFF, "CLS", "op_cls"),
    Instruction(0x00EE, 0xFFFF, "RET", "op_ret"),
    Instruction(0x0000, 0xF000, "SYS", "op_sys", "{nnn:#05x}"),
    Instruction(0x1000, 0xF000, "JP", "op_jp", "{nnn:#05x}"),
    Instruction(0x2000, 0xF000, "CALL", "op_call", "{nnn:#05x}"),
    Instruction(0xB000, 0xF000, "JP", "op_jp_v0", "V0, {nnn:#05x}"),
    # Skips
    Instruction(0x3000, 0xF000, "SE", "op_se_byte", "V{x:X}, {kk:#04x}"),
    Instruction(0x4000, 0xF000, "SNE", "op_sne_byte", "V{x:X}, {kk:#04x}"),
    Instruction(0x5000, 0xF00F, "SE", "op_se_register", "V{x:X}, V{y:X}"),
    Instruction(0x9000, 0xF00F, "SNE", "op_sne_register", "V{x:X}, V{y:X}"),
    Instruction(0xE09E, 0xF0FF, "SKP", "op_skp", "V{x:X}"),
    Instruction(0xE0A1, 0xF0FF, "SKNP", "op_sknp", "V{x:X}"),
    # Immediate loads
    Instruction(0x6000, 0xF000, "LD", "op_ld_byte", "V{x:X}, {kk:#04x}"),
    Instruction(0x7000, 0xF000, "ADD", "op_add_byte", "V{x:X}, {kk:#04x}"),
    # Register arithmetic and logic
    Instruction(0x8000, 0xF00F, "LD", "op_ld_register", "V{x:X}, V{y:X}"),
    Instruction(0x8001, 0xF00F, "OR", "op_or", "V{x:X}, V{y:X}"),
    Instruction(0x8002, 0xF00F, "AND", "op_and", "V{x:X}, V{y:X}"),
    Instruction(0x8003, 0xF00F, "XOR", "op_xor", "V{x:X}, V{y:X}"),
    Instruction(0x8004, 0xF00F, "ADD", "op_add_register", "V{x:X}, V{y:X}"),
    Instruction(0x8005, 0xF00F, "SUB", "op_sub", "V{x:X}, V{y:X}"),
    Instruction(0x8006, 0xF00F, "SHR", "op_shr", "V{x:X}, V{y:X}"),
    Instruction(0x8007, 0xF00F, "SUBN", "op_subn", "V{x:X}, V{y:X}"),
    Instruction(0x800E, 0xF00F, "SHL", "op_shl", "V{x:X}, V{y:X}"),
    # Address register and memory
    Instruction(0xA000, 0xF000, "LD", "op_ld_index", "I, {nnn:#05x}"),
    Instruction(0xF01E, 0xF0FF, "ADD", "op_add_index", "I, V{x:X}"),
    Instruction(0xF029, 0xF0FF, "LD", "op_ld_font", "F, V{x:X}"),
    Instruction(0xF033, 0xF0FF, "LD", "op_ld_bcd", "B, V{x:X}"),
    Instruction(0xF055, 0xF0FF, "LD", "op_store_registers", "[I], V{x:X}"),
    Instruction(0xF065, 0xF0FF, "LD", "op_load_registers", "V{x:X}, [I]"),
    # Timers, randomness and input
    Instruction(0xF007, 0xF0FF, "LD", "op_ld_from_delay", "V{x:X}, DT"),
    Instruction(0xF00A, 0xF0FF, "LD", "op_ld_key", "V{x:X}, K"),
    Instruction(0xF015, 0xF0FF, "LD", "op_ld_delay", "DT, V{x:X}"),
    Instruction(0xF018, 0xF0FF, "LD", "op_ld_sound", "ST, V{x:X}"),
    Instruction(0xC000, 0xF000, "RND", "op_rnd", "V{x:X}, {kk:#04x}"),
    # Display
    Instruction(0xD000, 0xF000, "DRW", "op_drw", "V{x:X}, V{y:X}, {n}"),
)


OPCODE_TABLE: Sequence[Family] = build_instruction_table(DEFAULT_INSTRUCTIONS)


def disassemble(word: int, table: Sequence[Family] = OPCODE_TABLE) -> str:
    """Render ``word`` as assembly text, or ``???`` when it does not decode."""

    instruction = lookup(table, word)
    if instruction is None:
        return f"??? {word & 0xFFFF:04X}"
    return instruction.format(word)
