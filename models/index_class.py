from .database import db


class IndexClass(db.Model):
    """One class session (lecture, tutorial, lab...) of a module index."""
    
    __tablename__ = 'index_classes'
    
    id = db.Column(db.Integer, primary_key=True)
    module_id = db.Column(db.Integer, db.ForeignKey('modules.id'), nullable=False)
    index_number = db.Column(db.String(10), nullable=False, index=True)  # e.g., "10101"
    class_type = db.Column(db.String(20), nullable=False)  # e.g., "LEC/STUDIO", "TUT", "LAB"
    group = db.Column(db.String(10), nullable=True)
    day = db.Column(db.String(3), nullable=False)  # MON..SUN
    start_time = db.Column(db.String(4), nullable=False)  # HHMM
    end_time = db.Column(db.String(4), nullable=False)  # HHMM
    venue = db.Column(db.String(100), nullable=False, default='')
    weeks = db.Column(db.String(100), nullable=False, default='')  # e.g., "1,2,3" - empty means every week
    
    def __repr__(self):
        return f'<IndexClass {self.index_number} {self.class_type} {self.day} {self.start_time}-{self.end_time}>'
    
    def get_weeks(self):
        """Parse weeks like '1,3,5' into [1, 3, 5], skipping anything non-numeric."""
        return [int(w) for w in self.weeks.split(',') if w.strip().isdigit()]
    
    def to_dict(self):
        return {
            'id': self.id,
            'index_number': self.index_number,
            'type': self.class_type,
            'group': self.group,
            'day': self.day,
            'start_time': self.start_time,
            'end_time': self.end_time,
            'venue': self.venue,
            'weeks': self.get_weeks()
        }
