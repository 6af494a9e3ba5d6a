from bubbleburst import db
from datetime import datetime, timezone
import uuid


def _utcnow():
    # Stored naive, always UTC
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _new_record_id():
    return uuid.uuid4().hex


class PlayerRecord(db.Model):
    """One submission to a screen. The score is filled in when the screen is reset."""
    __tablename__ = 'player_record'
    id = db.Column(db.String(32), primary_key=True, default=_new_record_id)
    name = db.Column(db.String(128), nullable=False)
    score = db.Column(db.Float, nullable=True, index=True)
    timestamp = db.Column(db.DateTime, nullable=False, default=_utcnow, index=True)

    def to_dict(self):
        return {
            '_id': self.id,
            'name': self.name,
            'score': self.score,
            # Naive column holds UTC; mark it so JS Date parses it as such
            'timestamp': self.timestamp.isoformat(timespec='milliseconds') + 'Z' if self.timestamp else None,
        }


class UserScore(db.Model):
    __tablename__ = 'user_score'
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.String(128), unique=True, nullable=False, index=True)
    screen1_score = db.Column(db.Float, nullable=True)
    screen2_score = db.Column(db.Float, nullable=True)

    def to_dict(self):
        return {
            'userID': self.user_id,
            'screen1': self.screen1_score,
            'screen2': self.screen2_score,
        }
