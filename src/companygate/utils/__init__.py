"""Hilfsmodule für ``companygate``."""
