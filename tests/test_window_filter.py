import pytest

from window_viewer.config import FilterRules
from window_viewer.window_filter import (
    NoiseFilter,
    is_blank_class,
    is_blank_title,
    is_ime_helper,
    is_toolkit_helper,
)


def test_rule_order_is_stable():
    assert NoiseFilter().rule_names == [
        "is_blank_class",
        "is_ime_helper",
        "is_toolkit_helper",
        "is_blank_title",
    ]


@pytest.mark.parametrize(
    "class_name,window_text,reason",
    [
        ("", "Title", "is_blank_class"),
        ("", "", "is_blank_class"),
        ("IME", "Default IME", "is_ime_helper"),
        ("IMEWindow", "x", "is_ime_helper"),
        ("MSCTFIME UI", "M", "is_ime_helper"),
        ("WindowsForms10.Window.8.app.0.141b42a_r6_ad1", "Parking", "is_toolkit_helper"),
        ("Notepad", "", "is_blank_title"),
    ],
)
def test_rejection_reason_names_the_first_failing_rule(class_name, window_text, reason):
    assert NoiseFilter().rejection_reason(class_name, window_text) == reason
    assert NoiseFilter().accepts(class_name, window_text) is False


@pytest.mark.parametrize(
    "class_name,window_text",
    [
        ("Notepad", "Untitled - Notepad"),
        ("CabinetWClass", "Downloads"),
        ("Chrome_WidgetWin_1", "New Tab"),
        ("MyIME", "contains IME but not as prefix"),
        ("MSCTFIME", "prefix needs the trailing UI"),
        ("WindowsForms9", "older toolkit prefix is kept"),
    ],
)
def test_non_noise_windows_survive(class_name, window_text):
    f = NoiseFilter()
    assert f.rejection_reason(class_name, window_text) is None
    assert f.accepts(class_name, window_text) is True


def test_blank_predicates():
    assert is_blank_class("") is True
    assert is_blank_class("A") is False
    assert is_blank_title("A", "") is True
    assert is_blank_title("A", "x") is False


def test_custom_prefixes_replace_defaults():
    f = NoiseFilter(FilterRules(ime_class_prefixes=["Input"], toolkit_class_prefixes=["Qt5"]))
    assert f.rejection_reason("InputHelper", "x") == "is_ime_helper"
    assert f.rejection_reason("Qt5QWindowIcon", "x") == "is_toolkit_helper"
    assert f.accepts("IME", "Default IME") is True


def test_none_values_are_treated_as_blank():
    assert NoiseFilter().rejection_reason(None, "x") == "is_blank_class"


def test_helper_predicates_use_default_prefixes():
    assert is_ime_helper("IME") is True
    assert is_ime_helper("MSCTFIME UI", "M") is True
    assert is_ime_helper("MyIME") is False
    assert is_toolkit_helper("WindowsForms10.Window.8.app") is True
    assert is_toolkit_helper("WindowsForms9") is False


def test_helper_predicates_accept_explicit_prefixes():
    assert is_ime_helper("InputHelper", "", ["Input"]) is True
    assert is_ime_helper("IME", "", ["Input"]) is False
    assert is_toolkit_helper("Qt5QWindowIcon", "", ("Qt5",)) is True
    assert is_toolkit_helper("anything", "", ["", ""]) is False
