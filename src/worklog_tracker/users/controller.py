from __future__ import annotations

from flask import Flask, jsonify, session

from ..common.http import SESSION_EMAIL_KEY, json_body, login_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/auth/google", methods=["POST"], endpoint="auth_google")
    def auth_google():
        data = json_body(allow_form=True)
        credential = data.get("credential")
        credential = credential.strip() if isinstance(credential, str) else ""

        profile = container.identity_provider.verify(credential)
        user = container.auth_service.sign_in(profile)

        session.clear()
        session.permanent = True
        # Only the identity key lives in the session; the role is looked up per request.
        session[SESSION_EMAIL_KEY] = user.email
        return jsonify({"success": True, "message": "Signed in", "user": user.to_dict()})

    @app.route("/auth/logout", methods=["POST"], endpoint="auth_logout")
    def auth_logout():
        session.clear()
        return jsonify({"success": True, "message": "Signed out"})

    @app.route("/api/me", methods=["GET"], endpoint="api_me")
    @login_required
    def api_me():
        user = container.access_control.resolve(session.get(SESSION_EMAIL_KEY))
        return jsonify({"success": True, "user": user.to_dict()})
