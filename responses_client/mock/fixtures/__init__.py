"""JSON fixtures for the mock transport."""
