"""Workout log routes for the public fitness tracker (no authentication)."""

import logging
from flask import Blueprint, request, jsonify

from duochat import db
from duochat.errors import ValidationError
from duochat.models import Workout
from duochat.services.workouts import parse_workout

logger = logging.getLogger(__name__)

workouts_bp = Blueprint('workouts', __name__)


def _database_error(action):
    return jsonify({
        'error': 'Database operation failed',
        'message': f'Unable to {action} workout. Please try again.'
    }), 500


@workouts_bp.route('', methods=['POST'])
def create_workout():
    """
    Log a workout.

    Request body:
    {
        "exercise_name": "Bench Press",
        "sets": 4,
        "reps": 8,
        "weight": 120,                          (legacy, optional if per_set_weights)
        "per_set_weights": [120, 130, 140, 135], (optional, length == sets)
        "difficulty_rating": 7,                 (optional, 1-10)
        "notes": "..."                          (optional)
    }
    """
    try:
        workout_input = parse_workout(request.get_json(silent=True))
    except ValidationError as e:
        return jsonify({'error': 'Validation failed', 'details': e.details}), 400

    try:
        workout = Workout(
            exercise_name=workout_input.exercise_name,
            sets=workout_input.sets,
            reps=workout_input.reps,
            weight=workout_input.weight,
            per_set_weights=workout_input.per_set_weights,
            difficulty_rating=workout_input.difficulty_rating,
            notes=workout_input.notes
        )
        db.session.add(workout)
        db.session.commit()
        return jsonify({'workout': workout.to_dict()}), 201
    except Exception as e:
        db.session.rollback()
        logger.error(f"[WORKOUTS] Database error creating workout: {e}")
        return _database_error('save')


@workouts_bp.route('', methods=['GET'])
def get_workouts():
    """All workouts, newest first."""
    try:
        workouts = Workout.query.order_by(Workout.created_at.desc()).all()
        return jsonify({'workouts': [w.to_dict() for w in workouts]}), 200
    except Exception as e:
        logger.error(f"[WORKOUTS] Database error fetching workouts: {e}")
        return _database_error('fetch')


@workouts_bp.route('/<workout_id>', methods=['DELETE'])
def delete_workout(workout_id):
    try:
        workout = db.session.get(Workout, workout_id)
        if not workout:
            return jsonify({'error': 'Workout not found'}), 404

        db.session.delete(workout)
        db.session.commit()
        return jsonify({'message': 'Workout deleted successfully'}), 200
    except Exception as e:
        db.session.rollback()
        logger.error(f"[WORKOUTS] Database error deleting workout {workout_id}: {e}")
        return _database_error('delete')
