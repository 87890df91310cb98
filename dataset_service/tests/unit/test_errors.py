import pytest
from sqlalchemy.exc import IntegrityError

from api.errors import integrity_error


def make_integrity_error(message):
    return IntegrityError("INSERT INTO users ...", {}, Exception(message))


@pytest.mark.parametrize("message", [
    "UNIQUE constraint failed: users.username",
    "(1062, \"Duplicate entry 'ana' for key 'users.username'\")",
])
def test_unique_violation_is_conflict(message):
    assert integrity_error(make_integrity_error(message)) == (409, "Record already exists.")


def test_foreign_key_violation_is_bad_request():
    status_code, message = integrity_error(make_integrity_error("FOREIGN KEY constraint failed"))
    assert status_code == 400
    assert message == "Invalid reference to a related record."


@pytest.mark.parametrize("message", [
    "NOT NULL constraint failed: tools.tool_name",
    "CHECK constraint failed: usage_count_positive",
])
def test_other_constraint_violations_are_bad_request(message):
    assert integrity_error(make_integrity_error(message)) == (400, "Record violates a data constraint.")
