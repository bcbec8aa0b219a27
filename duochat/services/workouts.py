"""Workout validation and weight reconciliation.

Clients send weights in three shapes:

- legacy:  ``weight`` only
- modern:  ``per_set_weights`` only
- hybrid:  both; ``per_set_weights`` wins

All three are stored the same way: ``per_set_weights`` verbatim (or null),
and ``weight`` equal to the first per-set weight whenever there is one, so
older readers that only know ``weight`` keep working.
"""

import math
from dataclasses import dataclass
from typing import List, Optional

from duochat.errors import ValidationError

WEIGHT_ERROR = 'Weight must be a non-negative number'

# Largest value an INTEGER column holds on PostgreSQL
MAX_INTEGER = 2147483647


@dataclass
class WorkoutInput:
    exercise_name: str
    sets: int
    reps: int
    weight: float
    per_set_weights: Optional[List[float]] = None
    difficulty_rating: Optional[int] = None
    notes: str = ''


def _as_number(value):
    """float(value) for finite numbers and numeric strings, else None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def _as_positive_int(value):
    number = _as_number(value)
    if number is None or not number.is_integer() or not 0 < number <= MAX_INTEGER:
        return None
    return int(number)


def reconcile_weights(sets, weight=None, per_set_weights=None):
    """
    Normalise the submitted weights into ``(weight, per_set_weights)``.

    Args:
        sets: validated number of sets, or None if sets itself was invalid
        weight: legacy single weight as submitted (may be None)
        per_set_weights: list of per-set weights as submitted (may be None)

    Returns:
        (weight: float, per_set_weights: list[float] | None)

    Raises:
        ValidationError: with ``details`` keyed by 'weight' / 'per_set_weights'
    """
    errors = {}

    if per_set_weights is not None:
        weights = None
        if not isinstance(per_set_weights, list):
            errors['per_set_weights'] = 'Per-set weights must be an array'
        else:
            weights = []
            for index, value in enumerate(per_set_weights):
                number = _as_number(value)
                if number is None or number < 0:
                    errors['per_set_weights'] = (
                        f'All per-set weights must be non-negative numbers (invalid value at index {index})'
                    )
                    break
                weights.append(number)
            if sets is not None and len(per_set_weights) != sets:
                errors['per_set_weights'] = (
                    f'Per-set weights array length ({len(per_set_weights)}) '
                    f'must match number of sets ({sets})'
                )
            elif not per_set_weights:
                errors['per_set_weights'] = 'Per-set weights must not be empty'

        # A legacy weight sent alongside is still checked, then ignored
        if weight is not None:
            legacy = _as_number(weight)
            if legacy is None or legacy < 0:
                errors['weight'] = WEIGHT_ERROR

        if errors:
            raise ValidationError('Validation failed', details=errors)
        return weights[0], weights

    if weight is None:
        raise ValidationError('Validation failed', details={'weight': WEIGHT_ERROR})

    legacy = _as_number(weight)
    if legacy is None or legacy < 0:
        raise ValidationError('Validation failed', details={'weight': WEIGHT_ERROR})
    return legacy, None


def parse_workout(data):
    """Validate a POST /api/workouts body into a WorkoutInput.

    All field errors are collected into one ValidationError.
    """
    if not isinstance(data, dict):
        raise ValidationError('Validation failed', details={'body': 'Request body must be a JSON object'})

    errors = {}

    exercise_name = data.get('exercise_name')
    if not isinstance(exercise_name, str) or not exercise_name.strip():
        errors['exercise_name'] = 'Exercise name is required'

    sets = _as_positive_int(data.get('sets'))
    if sets is None:
        errors['sets'] = 'Sets must be a positive number'

    reps = _as_positive_int(data.get('reps'))
    if reps is None:
        errors['reps'] = 'Reps must be a positive number'

    weight, per_set_weights = None, None
    try:
        weight, per_set_weights = reconcile_weights(
            sets, data.get('weight'), data.get('per_set_weights')
        )
    except ValidationError as e:
        errors.update(e.details)

    difficulty_rating = data.get('difficulty_rating')
    if difficulty_rating is not None:
        rating = _as_number(difficulty_rating)
        if rating is None or not rating.is_integer() or not 1 <= rating <= 10:
            errors['difficulty_rating'] = 'Difficulty rating must be an integer between 1 and 10'
        else:
            difficulty_rating = int(rating)

    notes = data.get('notes')
    if notes is not None and not isinstance(notes, str):
        errors['notes'] = 'Notes must be a string'

    if errors:
        raise ValidationError('Validation failed', details=errors)

    return WorkoutInput(
        exercise_name=exercise_name.strip(),
        sets=sets,
        reps=reps,
        weight=weight,
        per_set_weights=per_set_weights,
        difficulty_rating=difficulty_rating,
        notes=notes or '',
    )
