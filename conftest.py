"""Puts the repository root on sys.path so tests import modulos without installing."""
