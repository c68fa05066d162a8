"""Tests for the input registry."""

import pytest

from stackinput.input import DropdownInput, InputRegistry, StackInput, get_registry, make_input, register_input
from stackinput.input import factory


def test_dropdown_is_registered():
    assert "dropdown" in get_registry().get_registered_types()
    assert get_registry().get("dropdown") is DropdownInput


def test_make_input(fake_cas):
    ddl = make_input("dropdown", "ans2", "[[a,true]]", {"options": "radio"}, cas_session=fake_cas, seed=1)

    assert isinstance(ddl, DropdownInput)
    assert ddl.name == "ans2"
    assert ddl.seed == 1


def test_make_unknown_type():
    with pytest.raises(ValueError):
        make_input("matrix", "ans1")


def test_parameter_defaults_by_type():
    assert get_registry().get_parameters_defaults("dropdown")["options"] == ""


def test_register_rejects_non_inputs():
    registry = InputRegistry()
    with pytest.raises(TypeError):
        registry.register(dict)


def test_register_under_another_name():
    registry = InputRegistry()
    registry.register(DropdownInput, "radio")

    assert registry.get_registered_types() == ["radio"]
    assert isinstance(registry.make_input("radio", "ans1"), StackInput)


def test_register_input_in_global_registry(monkeypatch, fake_cas):
    monkeypatch.setattr(factory, "_global_registry", InputRegistry())
    register_input(DropdownInput, "choice")

    assert get_registry().get_registered_types() == ["choice"]
    ddl = make_input("choice", "ans1", "[[a,true]]", cas_session=fake_cas)
    assert isinstance(ddl, DropdownInput)
