"""
Integration Tests - Reporter Running Against In-Memory Components.
"""
