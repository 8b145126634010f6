"""Chip8App helpers that run without a pygame window."""

import pytest

from pychip8.system import MachineConfig, create_machine
from pychip8.ui import AppConfig, Chip8App
from pychip8.utils import reset_debug_categories
from pychip8.utils.debug import ENV_VARIABLE


@pytest.fixture
def app(monkeypatch):
    monkeypatch.delenv(ENV_VARIABLE, raising=False)
    reset_debug_categories()
    yield Chip8App(AppConfig(cycles_per_frame=4))
    reset_debug_categories()


def test_fault_reports_faulting_address(app):
    machine = create_machine(MachineConfig(program_image=b"\x60\x01\x51\x21\x60\x42"))

    with pytest.raises(RuntimeError, match="pc=202"):
        app._step_cpu(machine)

    assert machine.cpu.halted
    assert machine.cpu.state.v[0] == 1


def test_step_cpu_runs_configured_cycles(app):
    machine = create_machine(MachineConfig(program_image=b"\x70\x01\x12\x00"))

    assert app._step_cpu(machine) == 4
    assert machine.cpu.state.v[0] == 2


def test_memory_dump_clamps_negative_start(app, capsys):
    machine = create_machine(MachineConfig(program_image=b"\xAB\xCD"))

    app._dump_memory(machine, "-5 4")

    assert capsys.readouterr().out == "000: 00 00 00 00\n"


def test_memory_dump_clamps_past_end(app, capsys):
    machine = create_machine()
    machine.memory.store8(0xFFF, 0x7E)

    app._dump_memory(machine, "2000 40")

    assert capsys.readouterr().out == "FFF: 7E\n"


def test_memory_dump_defaults_to_index_register(app, capsys):
    machine = create_machine(MachineConfig(program_image=b"\xAB\xCD"))
    machine.cpu.state.i = 0x200

    app._dump_memory(machine, None)

    assert capsys.readouterr().out.splitlines()[0].startswith("200: AB CD 00")
