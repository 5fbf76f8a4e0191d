"""Declarative base for index tables."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass
