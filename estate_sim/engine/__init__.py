"""Simulation engine: pure reducers over ``GameState``."""
