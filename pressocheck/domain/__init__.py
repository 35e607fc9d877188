"""Framework-agnostic domain models and rules for blood-pressure readings."""
