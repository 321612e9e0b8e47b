from flask import Blueprint, jsonify, request
from models import db, Module
from utils.module_fetcher import build_module_for_generation

catalogue_bp = Blueprint('catalogue', __name__)


def _semester_filter(query):
    semester = request.args.get('semester', '').strip()
    if semester:
        query = query.filter(Module.semester == semester)
    return query


@catalogue_bp.route('/search')
def search_modules():
    """Search modules by code or name."""
    query = request.args.get('q', '').strip()

    if not query:
        return jsonify({'modules': []})

    modules = _semester_filter(Module.query.filter(
        db.or_(
            Module.code.ilike(f'%{query}%'),
            Module.name.ilike(f'%{query}%')
        )
    )).order_by(Module.code).limit(20).all()

    return jsonify({
        'modules': [module.to_dict() for module in modules]
    })


@catalogue_bp.route('/<string:code>')
def get_module(code):
    """Get module details, including its index numbers."""
    module = _semester_filter(Module.query.filter_by(code=code.upper())).first_or_404()
    data = module.to_dict()
    data['index_numbers'] = module.index_numbers()
    return jsonify(data)


@catalogue_bp.route('/<string:code>/indexes')
def get_module_indexes(code):
    """Get a module with every index and class, in the generator's input shape."""
    module = _semester_filter(Module.query.filter_by(code=code.upper())).first_or_404()
    resolved = build_module_for_generation(module)

    return jsonify({
        'module': module.to_dict(),
        'generation_input': resolved.to_dict() if resolved else None
    })
