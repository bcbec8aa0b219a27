"""Routes package for the chat application."""


def register_routes(app):
    """Register all route blueprints with the application."""
    from .auth import auth_bp
    from .messages import messages_bp
    from .translations import translations_bp
    from .workouts import workouts_bp

    app.register_blueprint(auth_bp, url_prefix='/api/auth')
    app.register_blueprint(messages_bp, url_prefix='/api/messages')
    app.register_blueprint(translations_bp, url_prefix='/api/translations')
    app.register_blueprint(workouts_bp, url_prefix='/api/workouts')
