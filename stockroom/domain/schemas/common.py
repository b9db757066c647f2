"""Validators shared by the partial-update schemas."""

from pydantic import field_validator


def reject_null(*fields: str):
    """Omitted fields are left untouched; an explicit null on a required column is refused."""

    def check(cls, value):
        if value is None:
            raise ValueError("may not be null")
        return value

    return field_validator(*fields, mode="before")(classmethod(check))
