import pytest

from solong.xpm import (
    TRANSPARENT,
    XpmError,
    XpmImage,
    channel_shifts,
    load_xpm_text,
    parse_xpm,
    read_xpm,
    split_words,
    strip_comments,
    text_to_rgb,
    to_visual_color,
)

SAMPLE = """/* XPM */
static char *sample[] = {
/* columns rows colors chars-per-pixel */
"2 2 2 1",
". c None",
"# c #FF0000",
// pixels
"#.",
".#"
};
"""

RGB565 = (0xF800, 0x07E0, 0x001F)


def test_split_words_spaces_and_tabs():
    assert split_words("  a\tb  c ") == ["a", "b", "c"]


def test_split_words_keeps_newlines_inside_words():
    assert split_words("a\nb c") == ["a\nb", "c"]


def test_strip_block_comment_keeps_length():
    text = '/* x */"a"'
    result = strip_comments(text)
    assert result == '       "a"'
    assert len(result) == len(text)


def test_strip_comments_ignores_quoted_markers():
    text = '"a/*b*/" "c//d"'
    assert strip_comments(text) == text


def test_strip_line_comment_removes_newline():
    assert strip_comments('// hi\n"a"') == '      "a"'


def test_text_to_rgb_hex():
    assert text_to_rgb("#FF00FF", None) == 0xFF00FF


def test_text_to_rgb_hex_ignores_end():
    assert text_to_rgb("#00FF00", "s") == 0x00FF00


def test_text_to_rgb_full_hex_is_none():
    assert text_to_rgb("#FFFFFFFF", None) == -1


def test_text_to_rgb_names():
    assert text_to_rgb("None", None) == -1
    assert text_to_rgb("RED", None) == 0xFF0000
    assert text_to_rgb("dark", "red") == 0x8B0000


def test_text_to_rgb_unknown_is_black():
    assert text_to_rgb("nosuchcolour", None) == 0


def test_load_sample():
    image = load_xpm_text(SAMPLE)
    assert (image.width, image.height) == (2, 2)
    assert image.pixels == (0xFF0000, TRANSPARENT, TRANSPARENT, 0xFF0000)
    assert image.pixel(1, 0) == TRANSPARENT


def test_pixel_out_of_range():
    image = load_xpm_text(SAMPLE)
    with pytest.raises(IndexError):
        image.pixel(2, 0)


def test_to_bytes_little_and_big_endian():
    image = XpmImage(2, 1, (0xFF0000, TRANSPARENT))
    assert image.to_bytes(4, False) == bytes([0, 0, 0xFF, 0, 0, 0, 0, 0xFF])
    assert image.to_bytes(4, True) == bytes([0, 0xFF, 0, 0, 0xFF, 0, 0, 0])


def test_to_bytes_truncates_to_pixel_size():
    image = XpmImage(1, 1, (0x123456,))
    assert image.to_bytes(2, True) == bytes([0x34, 0x56])


def test_to_bytes_rejects_zero_width_pixel():
    with pytest.raises(ValueError):
        XpmImage(1, 1, (0,)).to_bytes(0, False)


def test_two_char_keys_last_definition_wins():
    image = parse_xpm(["1 1 2 2", "ab c red", "ab c blue", "ab"])
    assert image.pixels == (0x0000FF,)


def test_three_char_keys_first_definition_wins():
    image = parse_xpm(["1 1 2 3", "abc c red", "abc c blue", "abc"])
    assert image.pixels == (0xFF0000,)


def test_unknown_key_is_black():
    image = parse_xpm(["2 1 1 1", "a c white", "az"])
    assert image.pixels == (0xFFFFFF, 0)


@pytest.mark.parametrize(
    "lines",
    [
        ["0 1 1 1", "a c red", "a"],
        ["1 1 1", "a c red", "a"],
        ["x 1 1 1", "a c red", "a"],
    ],
)
def test_bad_header(lines):
    with pytest.raises(XpmError):
        parse_xpm(lines)


def test_colour_without_c_key():
    with pytest.raises(XpmError):
        parse_xpm(["1 1 1 1", "a m red", "a"])


def test_colour_missing_after_c():
    with pytest.raises(XpmError):
        parse_xpm(["1 1 1 1", "a c", "a"])


def test_missing_rows():
    with pytest.raises(XpmError):
        parse_xpm(["1 2 1 1", "a c red", "a"])


def test_short_row():
    with pytest.raises(XpmError):
        parse_xpm(["3 1 1 1", "a c red", "aa"])


def test_read_xpm_file(tmp_path):
    path = tmp_path / "open.xpm"
    path.write_text(SAMPLE)
    image = read_xpm(path)
    assert image == load_xpm_text(SAMPLE)


def test_read_missing_file(tmp_path):
    with pytest.raises(XpmError):
        read_xpm(tmp_path / "missing.xpm")


def test_channel_shifts_rgb565():
    assert channel_shifts(*RGB565) == (11, 5, 5, 6, 0, 5)


def test_channel_shifts_truecolor():
    assert channel_shifts(0xFF0000, 0x00FF00, 0x0000FF) == (16, 8, 8, 8, 0, 8)


def test_channel_shifts_rejects_empty_mask():
    with pytest.raises(ValueError):
        channel_shifts(0, 0x07E0, 0x001F)


def test_visual_color_deep_display_is_unchanged():
    shifts = channel_shifts(*RGB565)
    assert to_visual_color(0x123456, 24, shifts) == 0x123456


def test_visual_color_rgb565():
    shifts = channel_shifts(*RGB565)
    assert to_visual_color(0xFFFFFF, 16, shifts) == 0xFFFF
    assert to_visual_color(0xFF0000, 16, shifts) == 0xF800
    assert to_visual_color(0x00FF00, 16, shifts) == 0x07E0
    assert to_visual_color(0x0000FF, 16, shifts) == 0x001F
    assert to_visual_color(0x000000, 16, shifts) == 0


def test_visual_color_of_test_gradient_corner():
    w = h = 242
    x = y = 0
    color = (x * 255) // w + ((((w - x) * 255) // w) << 16) + (((y * 255) // h) << 8)
    shifts = channel_shifts(*RGB565)
    assert to_visual_color(color, 16, shifts) == 0xF800