"""Declarative base shared by every CoachHub model."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass
