from pychip8.bus import Memory
from pychip8.video import FONT_SPRITES, FONT_START, GLYPH_BYTES, GLYPH_COUNT, glyph_address, install_font


def test_font_table_size():
    assert len(FONT_SPRITES) == GLYPH_COUNT * GLYPH_BYTES


def test_glyph_address_wraps_to_low_nibble():
    assert glyph_address(0) == FONT_START
    assert glyph_address(0xA) == FONT_START + 0xA * GLYPH_BYTES
    assert glyph_address(0x1F) == glyph_address(0xF)
    assert glyph_address(3, base=0x000) == 3 * GLYPH_BYTES


def test_install_font_copies_glyphs():
    memory = Memory()

    install_font(memory)

    assert memory.read_block(FONT_START, len(FONT_SPRITES)) == FONT_SPRITES
    assert memory.read_block(glyph_address(0xF), GLYPH_BYTES) == bytes((0xF0, 0x80, 0xF0, 0x80, 0x80))
    assert memory.load8(FONT_START - 1) == 0
