"""KAHA Travel Bot — random southern hemisphere trips with sun times and distances."""

__version__ = "0.1.0"
