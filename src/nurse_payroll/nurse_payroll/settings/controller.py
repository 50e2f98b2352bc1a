from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import error_response, json_body
from ..container import Container
from .model import RateSettingPatch


def register(app: Flask, container: Container) -> None:
    service = container.rate_service

    @app.route("/salary-settings", methods=["GET"], endpoint="list_salary_settings")
    def list_salary_settings():
        try:
            settings = service.get_all()
            return jsonify({"data": [s.to_dict() for s in settings.values()]})
        except Exception as e:
            return error_response(e)

    @app.route("/salary-settings/<key>", methods=["GET"], endpoint="get_salary_setting")
    def get_salary_setting(key: str):
        try:
            return jsonify(service.get(key).to_dict())
        except Exception as e:
            return error_response(e)

    @app.route("/salary-settings", methods=["POST"], endpoint="create_salary_setting")
    def create_salary_setting():
        try:
            data = json_body()
            setting = service.create(
                data.get("setting_key") or "",
                data.get("setting_value"),
                description=data.get("description"),
                updated_by=data.get("updated_by"),
            )
            return jsonify(setting.to_dict()), 201
        except Exception as e:
            return error_response(e)

    @app.route("/salary-settings/<key>", methods=["PUT"], endpoint="update_salary_setting")
    def update_salary_setting(key: str):
        try:
            data = json_body()
            patch = RateSettingPatch(
                value=data.get("setting_value"),
                description=data.get("description"),
                updated_by=data.get("updated_by"),
            )
            return jsonify(service.update(key, patch).to_dict())
        except Exception as e:
            return error_response(e)

    @app.route("/salary-settings/<key>", methods=["DELETE"], endpoint="delete_salary_setting")
    def delete_salary_setting(key: str):
        try:
            service.delete(key)
            return "", 204
        except Exception as e:
            return error_response(e)
