import os
import dotenv
dotenv.load_dotenv()
basedir = os.path.abspath(os.path.dirname(__file__))

# Flask configuration
SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-key-please-change-in-production'
DEBUG = os.environ.get('FLASK_DEBUG', '1') == '1'
LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

# Database configuration
if os.environ.get('DATABASE_URL'):
    SQLALCHEMY_DATABASE_URI = os.environ['DATABASE_URL']
elif os.environ.get('VERCEL'):
    # Vercel filesystem is read-only, use ephemeral /tmp
    SQLALCHEMY_DATABASE_URI = 'sqlite:////tmp/planner.db'
else:
    SQLALCHEMY_DATABASE_URI = 'sqlite:///' + os.path.join(basedir, 'planner.db')
SQLALCHEMY_TRACK_MODIFICATIONS = False

# Timetable generation
GENERATION_MAX_RESULTS = 100
# Candidate indexes examined before the builder gives up (0 disables the budget)
GENERATION_MAX_STEPS = int(os.environ.get('GENERATION_MAX_STEPS', 2000000))
GENERATION_MAX_MODULES = 15
VALIDATE_GENERATED_RESULTS = os.environ.get('VALIDATE_GENERATED_RESULTS', '1') == '1'
