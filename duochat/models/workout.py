"""Workout log entries for the public fitness tracker."""

from datetime import datetime
from duochat import db
from duochat.models.message import new_id, utc_isoformat


class Workout(db.Model):
    """One logged exercise.

    ``weight`` is the legacy single value that older clients read. When a
    workout carries ``per_set_weights`` the legacy value mirrors the first set.
    """
    __tablename__ = 'workouts'

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    exercise_name = db.Column(db.Text, nullable=False)
    sets = db.Column(db.Integer, nullable=False)
    reps = db.Column(db.Integer, nullable=False)
    weight = db.Column(db.Float, nullable=False)
    per_set_weights = db.Column(db.JSON, nullable=True)
    difficulty_rating = db.Column(db.Integer, nullable=True)
    notes = db.Column(db.Text, nullable=True, default='')
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False, index=True)

    __table_args__ = (
        db.CheckConstraint('sets > 0', name='ck_workouts_sets_positive'),
        db.CheckConstraint('reps > 0', name='ck_workouts_reps_positive'),
        db.CheckConstraint('weight >= 0', name='ck_workouts_weight_non_negative'),
        db.CheckConstraint(
            'difficulty_rating IS NULL OR (difficulty_rating BETWEEN 1 AND 10)',
            name='ck_workouts_difficulty_range'
        ),
    )

    def to_dict(self):
        return {
            'id': self.id,
            'exercise_name': self.exercise_name,
            'sets': self.sets,
            'reps': self.reps,
            'weight': self.weight,
            'per_set_weights': self.per_set_weights,
            'difficulty_rating': self.difficulty_rating,
            'notes': self.notes,
            'created_at': utc_isoformat(self.created_at)
        }

    def __repr__(self):
        return f'<Workout {self.id} {self.exercise_name} {self.sets}x{self.reps}>'
