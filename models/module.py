from datetime import datetime
from .database import db


class Module(db.Model):
    """Catalogue module offered in a given semester."""
    
    __tablename__ = 'modules'
    __table_args__ = (db.UniqueConstraint('code', 'semester', name='uq_module_code_semester'),)
    
    id = db.Column(db.Integer, primary_key=True)
    code = db.Column(db.String(20), nullable=False, index=True)  # e.g., "CS1010"
    semester = db.Column(db.String(20), nullable=False, index=True)  # e.g., "2025_2"
    name = db.Column(db.String(200), nullable=False)
    au = db.Column(db.Integer, default=0)  # Academic units
    school = db.Column(db.String(50), nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    
    # One row per class session of every index
    index_classes = db.relationship('IndexClass', backref='module', lazy='dynamic', cascade="all, delete-orphan")
    
    def __repr__(self):
        return f'<Module {self.code} ({self.semester}): {self.name}>'
    
    def index_numbers(self):
        """Distinct index numbers of this module, sorted."""
        return sorted({row.index_number for row in self.index_classes})
    
    def to_dict(self):
        return {
            'id': self.id,
            'code': self.code,
            'semester': self.semester,
            'name': self.name,
            'au': self.au,
            'school': self.school
        }
