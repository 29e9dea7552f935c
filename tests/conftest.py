import pytest

from braillepic.export import find_braille_font


@pytest.fixture
def font_path():
    path = find_braille_font()
    if path is None:
        pytest.skip("No Braille-capable font found on system")
    return path
