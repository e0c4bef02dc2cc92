def register_blueprints(app):
    from weatherdash.routes.health import health_bp
    from weatherdash.routes.proxy import proxy_bp
    from weatherdash.routes.views import views_bp

    app.register_blueprint(health_bp)
    app.register_blueprint(proxy_bp, url_prefix='/api')
    app.register_blueprint(views_bp, url_prefix='/api')
