"""
Main application initialization module.
Sets up Flask app with all necessary configurations and extensions.
"""
from flask import Flask
from flask_cors import CORS
import logging
from dotenv import load_dotenv
from .config import config_by_name, ENVIRONMENT


# Load environment variables
load_dotenv()


def create_app(config_name=None, supabase_factory=None):
    """
    Create and configure the Flask application
    @param config_name: str - Name of the configuration to use
    @param supabase_factory: callable returning a Supabase client, replaces create_client
    @returns: Flask - Configured Flask application instance
    """
    config_class = config_by_name.get(config_name or ENVIRONMENT, config_by_name['development'])
    if not config_class.TESTING:
        config_class.validate()

    app = Flask(__name__)
    app.config.from_object(config_class)
    if supabase_factory is not None:
        app.config['SUPABASE_CLIENT_FACTORY'] = supabase_factory

    CORS(app, resources={
        r"/api/*": {
            "origins": [app.config['SITE_URL']]
        }
    }, supports_credentials=True)

    # Register blueprints with error handling
    try:
        from .controllers.auth_controller import auth_bp
        app.register_blueprint(auth_bp)
        logging.info("Successfully registered auth blueprint")

        from .controllers.dashboard_controller import dashboard_bp
        app.register_blueprint(dashboard_bp)
        logging.info("Successfully registered dashboard blueprint")

        from .controllers.course_controller import course_bp
        app.register_blueprint(course_bp)
        logging.info("Successfully registered course blueprint")

        from .controllers.api_controller import api_bp
        app.register_blueprint(api_bp, url_prefix='/api')
        logging.info("Successfully registered api blueprint")

        # Add a simple health check route
        @app.route('/health', methods=['GET'])
        def health_check():
            return {'status': 'healthy'}, 200

    except Exception as e:
        logging.error(f"Error registering blueprints: {str(e)}")
        raise

    return app
