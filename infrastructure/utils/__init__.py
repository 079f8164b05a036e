"""Small runtime helpers."""

from infrastructure.utils.seeding import set_seed

__all__ = ["set_seed"]
