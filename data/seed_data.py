"""Seed data script to populate the catalogue with sample modules and indexes."""

from models import db, Module, IndexClass

SEMESTER = '2025_2'

ALL_WEEKS = ''
ODD_WEEKS = '1,3,5,7,9,11,13'
EVEN_WEEKS = '2,4,6,8,10,12'
TEACHING_WEEKS = '2,3,4,5,6,7,8,9,10,11,12,13'

MODULES_DATA = [
    {'code': 'CS1010', 'name': 'Programming Methodology', 'au': 4, 'school': 'CCDS'},
    {'code': 'CS1231', 'name': 'Discrete Structures', 'au': 4, 'school': 'CCDS'},
    {'code': 'MA1521', 'name': 'Calculus for Computing', 'au': 4, 'school': 'SPMS'},
    {'code': 'EE2026', 'name': 'Digital Design', 'au': 3, 'school': 'EEE'},
    {'code': 'HW0188', 'name': 'Engineering Communication', 'au': 2, 'school': 'LHS'},
]

# (module, index, type, day, start, end, venue, weeks)
CLASSES_DATA = [
    # CS1010 - shared lecture, tutorials on different days
    ('CS1010', '10101', 'LEC/STUDIO', 'MON', '0900', '1100', 'LT1', ALL_WEEKS),
    ('CS1010', '10101', 'TUT', 'WED', '1000', '1100', 'TR+12', TEACHING_WEEKS),
    ('CS1010', '10102', 'LEC/STUDIO', 'MON', '0900', '1100', 'LT1', ALL_WEEKS),
    ('CS1010', '10102', 'TUT', 'THU', '1400', '1500', 'TR+15', TEACHING_WEEKS),
    ('CS1010', '10103', 'LEC/STUDIO', 'MON', '0900', '1100', 'LT1', ALL_WEEKS),
    ('CS1010', '10103', 'TUT', 'FRI', '0900', '1000', 'ONLINE', TEACHING_WEEKS),

    # CS1231
    ('CS1231', '20201', 'LEC/STUDIO', 'TUE', '1000', '1200', 'LT2', ALL_WEEKS),
    ('CS1231', '20201', 'TUT', 'WED', '1000', '1100', 'TR+08', TEACHING_WEEKS),
    ('CS1231', '20202', 'LEC/STUDIO', 'TUE', '1000', '1200', 'LT2', ALL_WEEKS),
    ('CS1231', '20202', 'TUT', 'WED', '1100', '1200', 'TR+09', TEACHING_WEEKS),

    # MA1521
    ('MA1521', '30301', 'LEC/STUDIO', 'MON', '1000', '1200', 'LT19', ALL_WEEKS),
    ('MA1521', '30302', 'LEC/STUDIO', 'MON', '1400', '1600', 'LT19', ALL_WEEKS),
    ('MA1521', '30302', 'TUT', 'FRI', '1300', '1400', 'TR+61', EVEN_WEEKS),

    # EE2026 - alternating lab weeks
    ('EE2026', '40401', 'LEC/STUDIO', 'TUE', '1400', '1600', 'LT11', ALL_WEEKS),
    ('EE2026', '40401', 'LAB', 'THU', '1400', '1700', 'HWLAB1', ODD_WEEKS),
    ('EE2026', '40402', 'LEC/STUDIO', 'TUE', '1400', '1600', 'LT11', ALL_WEEKS),
    ('EE2026', '40402', 'LAB', 'THU', '1400', '1700', 'HWLAB1', EVEN_WEEKS),

    # HW0188 - online seminar
    ('HW0188', '50501', 'SEM', 'SAT', '0900', '1200', 'E-LEARN', ALL_WEEKS),
]


def seed_database():
    """Populate the catalogue with sample modules for SEMESTER."""

    # Clear existing data
    IndexClass.query.delete()
    Module.query.delete()

    modules = {}
    for m_data in MODULES_DATA:
        module = Module(semester=SEMESTER, **m_data)
        db.session.add(module)
        db.session.flush()
        modules[m_data['code']] = module

    for code, index_number, class_type, day, start, end, venue, weeks in CLASSES_DATA:
        db.session.add(IndexClass(
            module_id=modules[code].id,
            index_number=index_number,
            class_type=class_type,
            day=day,
            start_time=start,
            end_time=end,
            venue=venue,
            weeks=weeks
        ))

    db.session.commit()
    print("Database seeded successfully!")


if __name__ == '__main__':
    from app import app

    with app.app_context():
        seed_database()
