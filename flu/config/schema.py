#!/usr/bin/env python3
"""
Configuration schema definition for validation
"""
from typing import Dict, Any, List

_MISSING = object()
_NUMBER = (int, float)


class ConfigSchema:
    """Configuration schema for validation

    Keys are dotted paths into the nested configuration dictionary.
    """

    SCHEMA = {
        'alignment.dna.matrix': {'type': str, 'required': True},
        'alignment.dna.gap_open': {'type': _NUMBER, 'required': True},
        'alignment.dna.gap_extend': {'type': _NUMBER, 'required': True},
        'alignment.protein.matrix': {'type': str, 'required': True},
        'alignment.protein.gap_open': {'type': _NUMBER, 'required': True},
        'alignment.protein.gap_extend': {'type': _NUMBER, 'required': True},
        'validation.min_identity': {'type': _NUMBER, 'required': False, 'nullable': True},
        'validation.check_significance': {'type': bool, 'required': False},
        'logging.level': {'type': str, 'required': False},
        'logging.format': {'type': str, 'required': False},
        'logging.log_dir': {'type': str, 'required': False},
    }

    @staticmethod
    def _lookup(config: Dict[str, Any], dotted: str) -> Any:
        current: Any = config
        for part in dotted.split('.'):
            if not isinstance(current, dict) or part not in current:
                return _MISSING
            current = current[part]
        return current

    @staticmethod
    def _type_name(expected) -> str:
        if isinstance(expected, tuple):
            return " or ".join(t.__name__ for t in expected)
        return expected.__name__

    @classmethod
    def validate(cls, config: Dict[str, Any]) -> List[str]:
        """Validate configuration against schema

        Args:
            config: Configuration to validate

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        for key, props in cls.SCHEMA.items():
            value = cls._lookup(config, key)

            if value is _MISSING:
                if props.get('required', False):
                    errors.append(f"Missing required configuration field: {key}")
                continue

            if value is None and props.get('nullable', False):
                continue

            expected = props['type']
            # bool is an int subclass; never accept it as a number
            is_bool = isinstance(value, bool) and expected is not bool
            if is_bool or not isinstance(value, expected):
                errors.append(
                    f"Invalid type for {key}: expected {cls._type_name(expected)}, "
                    f"got {type(value).__name__}"
                )

        min_identity = cls._lookup(config, 'validation.min_identity')
        if isinstance(min_identity, _NUMBER) and not isinstance(min_identity, bool):
            if not 0.0 <= min_identity <= 1.0:
                errors.append(f"validation.min_identity must be within [0, 1], got {min_identity}")

        return errors
