import pytest

from smart_cooking.ingredients.parsing import extract_ingredient_name


@pytest.mark.parametrize(
    "input_text, expected_name, expected_quantity, expected_unit",
    [
        ("300g thịt gà", "thịt gà", "300", "g"),
        ("2 củ cà rốt", "cà rốt", "2", "củ"),
        ("1 chút muối", "muối", "1", "chút"),
        ("1.5kg xương heo", "xương heo", "1.5", "kg"),
        ("2 lá chanh", "chanh", "2", "lá"),
        ("500 ml nước dừa", "nước dừa", "500", "ml"),
        ("1/2 chén đường", "đường", "1/2", "chén"),
        ("2 Muỗng nước mắm", "nước mắm", "2", "muỗng"),
        ("3 quả trứng", "trứng", "3", "quả"),
        ("2 lemons", "lemons", "2", None),
        ("4 tép tỏi", "tép tỏi", "4", None),
        ("  muối  ", "muối", None, None),
        ("hành lá", "hành lá", None, None),
        ("", "", None, None),
    ],
)
def test_extract_ingredient_name(
    input_text, expected_name, expected_quantity, expected_unit
):
    extracted = extract_ingredient_name(input_text)
    assert extracted.name == expected_name
    assert extracted.quantity == expected_quantity
    assert extracted.unit == expected_unit
    assert extracted.original == input_text.strip()
