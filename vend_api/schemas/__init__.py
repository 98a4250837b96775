"""Pydantic models of the records exchanged with the Vend API."""
