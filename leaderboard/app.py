"""
Leaderboard Live — Flask Server
JSON API behind the leaderboard dashboard.

The page itself (table, search box, cohort toggle) lives in the frontend;
this server exposes the ranked list, status flags, a refresh trigger,
per-student details and the CSV export.
"""

import asyncio
import logging
import os
import threading
from datetime import date, datetime, timezone

from dotenv import load_dotenv
from flask import Flask, Response, abort, jsonify
from flask_cors import CORS

from leaderboard import config
from leaderboard.board import Leaderboard
from leaderboard.errors import ConfigurationError, TransportError
from leaderboard.export import export_filename, students_to_csv

logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(message)s")
log = logging.getLogger("leaderboard-live")


def create_app(sheets_config=None, board=None):
    """Build the Flask app around one Leaderboard (config injected, not global)."""
    if board is None:
        board = Leaderboard(sheets_config or config.load_config())
    sheets_config = board.config

    app = Flask(__name__, static_folder=None)
    CORS(app)
    app.extensions["leaderboard"] = board

    def _view_or_404(cohort):
        if cohort not in board.cohorts:
            abort(404, description=f"Unknown cohort '{cohort}'")
        return board.view(cohort)

    # ═══════════════════════════════════════
    # LEADERBOARD
    # ═══════════════════════════════════════

    @app.route("/api/leaderboard/<cohort>")
    def api_leaderboard(cohort):
        """Return the current ranked list with loading/error/configured flags."""
        return jsonify(_view_or_404(cohort).to_dict())

    @app.route("/api/leaderboard/<cohort>/refresh", methods=["POST"])
    async def api_refresh(cohort):
        """Re-read the cohort's sheet and replace its ranked list."""
        _view_or_404(cohort)
        view = await board.refresh(cohort)
        if not view.is_configured:
            return jsonify(view.to_dict()), 503
        if view.error:
            return jsonify(view.to_dict()), 502
        return jsonify(view.to_dict())

    @app.route("/api/leaderboard/<cohort>/students/<path:name>")
    async def api_student_detail(cohort, name):
        """Return one student's per-category breakdown."""
        _view_or_404(cohort)
        try:
            detail = await board.detail(cohort, name)
        except ConfigurationError as e:
            return jsonify({"error": str(e), "errors": e.errors}), 503
        except TransportError as e:
            return jsonify({"error": str(e)}), 502
        if detail is None:
            return jsonify({"error": "not found", "name": name}), 404
        return jsonify(detail.to_dict())

    @app.route("/api/leaderboard/<cohort>/export.csv")
    def api_export(cohort):
        """Download the current ranked list as CSV."""
        view = _view_or_404(cohort)
        if not view.students:
            return jsonify({"error": "No data to export"}), 404
        filename = export_filename(cohort, date.today())
        return Response(
            students_to_csv(view.students),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    # ═══════════════════════════════════════
    # STATUS
    # ═══════════════════════════════════════

    @app.route("/api/status")
    def api_status():
        """Health check — configuration and per-cohort load state."""
        cohorts = {}
        for cohort in board.cohorts:
            view = board.view(cohort)
            cohorts[cohort] = {
                "count": len(view.students),
                "loading": view.loading,
                "error": view.error,
                "notStarted": view.not_started,
            }
        return jsonify({
            "ok": True,
            "config": config.config_status(sheets_config),
            "cohorts": cohorts,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        })

    return app


# ═══════════════════════════════════════
# PRE-WARM
# ═══════════════════════════════════════

def _prewarm(board):
    """Load every configured cohort in the background so the first page view has data."""
    log.info("Pre-warming leaderboards (background)...")
    asyncio.run(board.refresh_all())
    log.info("Leaderboard pre-warm complete")


# ═══════════════════════════════════════
# STARTUP
# ═══════════════════════════════════════

def main():
    load_dotenv()
    sheets_config = config.load_config()
    board = Leaderboard(sheets_config)
    app = create_app(board=board)

    status = config.validate_config(sheets_config)
    log.info("=" * 50)
    log.info("Leaderboard Live — Starting server")
    log.info(f"Cohorts: {', '.join(board.cohorts)}")
    if not status.is_valid:
        for error in status.errors:
            log.warning(f"Config: {error}")
    log.info(f"Server: http://localhost:{config.SERVER_PORT}")
    log.info("=" * 50)

    # Only in the serving process, not the reloader parent
    if os.environ.get("WERKZEUG_RUN_MAIN") == "true" or not config.DEBUG:
        threading.Thread(target=_prewarm, args=(board,), daemon=True).start()

    app.run(
        host=config.SERVER_HOST,
        port=config.SERVER_PORT,
        debug=config.DEBUG,
        threaded=True,
    )


if __name__ == "__main__":
    main()
