from __future__ import annotations

from flask import Flask, g, jsonify, request

from ..common.auth import make_token_required
from ..container import Container
from .schemas import LoginRequest, PasswordChange, ProfileUpdate, RegisterRequest


def register(app: Flask, container: Container) -> None:
    token_required = make_token_required(container.token_service)

    @app.route("/api/auth/register", methods=["POST"], endpoint="auth_register")
    def auth_register():
        user_id = container.auth_service.register(RegisterRequest.from_payload(request.get_json(silent=True)))
        return jsonify({"success": True, "message": "User registered successfully", "userId": user_id})

    @app.route("/api/auth/login", methods=["POST"], endpoint="auth_login")
    def auth_login():
        result = container.auth_service.login(LoginRequest.from_payload(request.get_json(silent=True)))
        return jsonify(
            {
                "success": True,
                "message": "Login successful",
                "token": result.token,
                "user": {"id": result.user.user_id, "name": result.user.name, "email": result.user.email},
            }
        )

    @app.route("/api/user/profile", methods=["GET"], endpoint="user_profile")
    @token_required
    def profile():
        return jsonify({"user": container.user_service.get_profile(g.user_id).public_dict()})

    @app.route("/api/user/profile", methods=["PUT"], endpoint="user_profile_update")
    @token_required
    def profile_update():
        update = ProfileUpdate.from_payload(request.get_json(silent=True))
        user = container.user_service.update_profile(g.user_id, update)
        return jsonify({"success": True, "message": "Profile updated successfully", "user": user.public_dict()})

    @app.route("/api/user/password", methods=["PUT"], endpoint="user_password")
    @token_required
    def password():
        container.user_service.change_password(g.user_id, PasswordChange.from_payload(request.get_json(silent=True)))
        return jsonify({"success": True, "message": "Password changed successfully"})

    @app.route("/api/user/stats", methods=["GET"], endpoint="user_stats")
    @token_required
    def stats():
        return jsonify(container.stats_service.user_stats(g.user_id).to_dict())
