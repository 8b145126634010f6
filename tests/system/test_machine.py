from pychip8.cpu import PROGRAM_START, Quirks
from pychip8.system import MachineConfig, create_machine
from pychip8.video import FONT_SPRITES, FONT_START


def test_create_machine_defaults():
    machine = create_machine()

    assert machine.cpu.memory is machine.memory
    assert machine.cpu.framebuffer is machine.framebuffer
    assert machine.cpu.keypad is machine.keypad
    assert machine.cpu.state.pc == PROGRAM_START
    assert machine.cpu.state.sp == 128
    assert machine.program is None
    assert machine.memory.read_block(FONT_START, len(FONT_SPRITES)) == FONT_SPRITES


def test_create_machine_with_program():
    config = MachineConfig(program_image=b"\x60\x07\x12\x02", program_name="loop")
    machine = create_machine(config)

    assert machine.program is not None
    assert machine.program.name == "loop"
    assert machine.cpu.run(3) == 3
    assert machine.cpu.state.v[0] == 7
    assert machine.cpu.state.pc == 0x202


def test_machine_config_is_applied():
    machine = create_machine(MachineConfig(stack_size=4, seed=3, quirks=Quirks(shift_uses_vy=True)))

    assert machine.cpu.stack.capacity == 4
    assert machine.cpu.state.sp == 4
    assert machine.cpu.seed == 3
    assert machine.cpu.quirks.shift_uses_vy


def test_keypad_resumes_key_wait():
    machine = create_machine(MachineConfig(program_image=b"\xF3\x0A\x00\xE0"))

    assert machine.cpu.step() == 1
    assert machine.cpu.awaiting_key
    assert machine.cpu.step() == 0

    machine.keypad.press_name("v")

    assert not machine.cpu.awaiting_key
    assert machine.cpu.state.v[3] == 0xF
    assert machine.cpu.state.pc == 0x202


def test_tick_and_sound_active():
    machine = create_machine(MachineConfig(program_image=b"\x60\x02\xF0\x18\xF0\x15"))
    machine.cpu.run(3)

    assert machine.sound_active
    machine.tick()
    assert machine.sound_active
    machine.tick()
    assert not machine.sound_active
    assert machine.cpu.state.delay_timer == 0


def test_reset_keeps_font_and_drops_program():
    machine = create_machine(MachineConfig(program_image=b"\x60\x2A"))
    machine.cpu.step()

    machine.reset()

    assert machine.program is None
    assert machine.cpu.state.v[0] == 0
    assert machine.memory.load8(PROGRAM_START) == 0
    assert machine.memory.read_block(FONT_START, len(FONT_SPRITES)) == FONT_SPRITES


def test_load_replaces_program():
    machine = create_machine()

    program = machine.load(b"\x6A\x01", name="second")

    assert machine.program is program
    machine.cpu.step()
    assert machine.cpu.state.v[0xA] == 1
