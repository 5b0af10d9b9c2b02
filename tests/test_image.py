import pytest

from babalong.image import (
    Image,
    draw_sprite_to_buffer,
    unpack_sprite,
    upscale_sprite,
)


def _patterned(width, height):
    return Image(width, height, [y * width + x + 1 for y in range(height)
                                 for x in range(width)])


def test_new_image_is_black():
    img = Image(3, 2)
    assert img.pixels == [0] * 6


def test_wrong_pixel_count_rejected():
    with pytest.raises(ValueError):
        Image(2, 2, [1, 2, 3])


def test_put_then_get_round_trip():
    img = Image(4, 4)
    img.put_pixel(2, 3, 0xFF00FF)
    assert img.get_pixel(2, 3) == 0xFF00FF
    assert img.get_pixel(3, 2) == 0


@pytest.mark.parametrize("x,y", [(-1, 0), (0, -1), (4, 0), (0, 4)])
def test_get_outside_returns_zero(x, y):
    img = Image(4, 4, [7] * 16)
    assert img.get_pixel(x, y) == 0


@pytest.mark.parametrize("x,y", [(-1, 0), (0, -1), (4, 0), (0, 4)])
def test_put_outside_is_ignored(x, y):
    img = Image(4, 4)
    img.put_pixel(x, y, 5)
    assert img.pixels == [0] * 16


def test_clear_fills_every_pixel():
    img = _patterned(3, 3)
    img.clear(0x123456)
    assert img.pixels == [0x123456] * 9
    img.clear()
    assert img.pixels == [0] * 9


def test_unpack_copies_region():
    sheet = _patterned(6, 4)
    dest = Image(2, 2)
    unpack_sprite(dest, sheet, (3, 1))
    assert dest.pixels == [
        sheet.get_pixel(3, 1), sheet.get_pixel(4, 1),
        sheet.get_pixel(3, 2), sheet.get_pixel(4, 2),
    ]


def test_unpack_past_edge_reads_zero():
    sheet = _patterned(3, 3)
    dest = Image(2, 2)
    unpack_sprite(dest, sheet, (2, 2))
    assert dest.get_pixel(0, 0) == sheet.get_pixel(2, 2)
    assert dest.get_pixel(1, 0) == 0
    assert dest.get_pixel(0, 1) == 0


def test_upscale_doubles_tile():
    src = _patterned(25, 25)
    dest = Image(50, 50)
    upscale_sprite(dest, src)
    for y in range(50):
        for x in range(50):
            assert dest.get_pixel(x, y) == src.get_pixel(x // 2, y // 2)


def test_upscale_same_size_is_copy():
    src = _patterned(5, 4)
    dest = Image(5, 4)
    upscale_sprite(dest, src)
    assert dest.pixels == src.pixels


def test_draw_skips_transparent_pixels():
    buffer = Image(4, 4, [9] * 16)
    sprite = Image(2, 2, [0, 5, 6, 0])
    draw_sprite_to_buffer(buffer, sprite, (1, 1))
    assert buffer.get_pixel(1, 1) == 9
    assert buffer.get_pixel(2, 1) == 5
    assert buffer.get_pixel(1, 2) == 6
    assert buffer.get_pixel(2, 2) == 9
    assert buffer.pixels.count(9) == 14


def test_draw_clips_at_buffer_edge():
    buffer = Image(2, 2)
    sprite = Image(2, 2, [1, 2, 3, 4])
    draw_sprite_to_buffer(buffer, sprite, (1, 1))
    assert buffer.pixels == [0, 0, 0, 1]