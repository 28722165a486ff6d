"""LUMON Shell test suite."""
