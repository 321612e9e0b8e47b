from flask import Flask
from models import db
from routes import main_bp, catalogue_bp, planner_bp

app = Flask(__name__)
app.config.from_object('config')
app.logger.setLevel(app.config['LOG_LEVEL'])

# Initialize database
db.init_app(app)

# Register blueprints
app.register_blueprint(main_bp)
app.register_blueprint(catalogue_bp, url_prefix='/api/modules')
app.register_blueprint(planner_bp, url_prefix='/api/timetables')

# Create tables
with app.app_context():
    db.create_all()

@app.after_request
def add_header(response):
    """Add headers to prevent caching."""
    response.headers['Cache-Control'] = 'no-cache, no-store, must-revalidate'
    response.headers['Pragma'] = 'no-cache'
    response.headers['Expires'] = '0'
    return response


if __name__ == '__main__':
    app.run(debug=app.config['DEBUG'], port=5000)
