"""Background job functions for RQ worker."""


def write_audit_entry_job(entry):
    """Background job to persist an audit entry handed off by a request."""
    from causeway import create_app

    app = create_app()

    with app.app_context():
        try:
            from causeway.services.audit import write_entry
            log = write_entry(entry)
            return log.id
        except Exception as e:
            app.logger.error(f"Audit job failed: {e}")
            raise


def run_link_check_job():
    """Background job to probe external resource URLs."""
    from causeway import create_app

    app = create_app()

    with app.app_context():
        from causeway.services.health import HealthService
        return HealthService.run_link_check()
