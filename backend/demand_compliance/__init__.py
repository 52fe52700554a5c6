"""Demand Compliance - FDCPA validation backend."""
