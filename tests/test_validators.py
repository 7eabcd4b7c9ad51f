# tests/test_validators.py

from __future__ import annotations

from utils.validators import (
    validate_age,
    validate_email,
    validate_password,
    validate_signup,
    validate_task_create,
    validate_task_update,
    validate_user_update,
)


def test_email_is_trimmed_and_lowercased():
    result = validate_email("  Rakesh@Example.COM ")
    assert result.ok
    assert result.value == "rakesh@example.com"


def test_email_format():
    assert not validate_email("rakeshatexample.com").ok
    assert not validate_email(None).ok


def test_password_rules():
    assert validate_password("Rakesh@123").ok
    assert not validate_password("short").ok
    assert not validate_password("myPassword1").ok
    assert not validate_password("Rakesh@123", min_length=12).ok
    assert validate_password("  Rakesh@123  ").value == "Rakesh@123"


def test_age_rules():
    assert validate_age(0).ok
    assert not validate_age(-1).ok
    assert not validate_age(True).ok
    assert not validate_age("10").ok


def test_signup_ignores_extra_keys_and_defaults_age():
    result = validate_signup({"name": " Roy ", "email": "roy@example.com", "password": "myPass777!", "role": "admin"})
    assert result.ok
    assert result.value == {"name": "Roy", "email": "roy@example.com", "password": "myPass777!", "age": 0}


def test_signup_reports_every_missing_field():
    result = validate_signup({})
    assert not result.ok
    assert len(result.errors) == 3


def test_user_update_whitelist():
    assert validate_user_update({"name": "Roy", "age": 3}).ok
    result = validate_user_update({"location": "palakkad"})
    assert not result.ok


def test_task_create_defaults_completed():
    result = validate_task_create({"description": " Buy milk "})
    assert result.ok
    assert result.value == {"description": "Buy milk", "completed": False}


def test_task_update_rejects_non_boolean_completed():
    assert not validate_task_update({"completed": "true"}).ok
    assert not validate_task_update({"owner": "x"}).ok
    assert validate_task_update({}).ok


def test_non_object_payloads():
    assert not validate_signup(None).ok
    assert not validate_task_create(["description"]).ok
