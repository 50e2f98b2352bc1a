from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import error_response, json_body, optional_int_arg, optional_str_arg
from ..container import Container
from .model import SalaryFilters


def register(app: Flask, container: Container) -> None:
    calculation = container.salary_calculation_service
    records = container.salary_record_service

    def _filters() -> SalaryFilters:
        return SalaryFilters(
            user_id=optional_int_arg("user_id"),
            nurse_id=optional_str_arg("nurse_id"),
            year_month=optional_str_arg("year_month"),
        )

    @app.route("/salary-calculation", methods=["GET"], endpoint="list_calculated_salaries")
    def list_calculated_salaries():
        try:
            return jsonify({"data": [r.to_dict() for r in calculation.list(_filters())]})
        except Exception as e:
            return error_response(e)

    @app.route(
        "/salary-calculation/calculate/<nurse_id>/<year_month>",
        methods=["GET"],
        endpoint="preview_salary",
    )
    def preview_salary(nurse_id: str, year_month: str):
        try:
            return jsonify(calculation.calculate(nurse_id, year_month).to_dict())
        except Exception as e:
            return error_response(e)

    @app.route("/salary-calculation/calculate", methods=["POST"], endpoint="calculate_and_save_salary")
    def calculate_and_save_salary():
        try:
            data = json_body()
            saved = calculation.calculate_and_save(str(data.get("nurse_id") or ""), str(data.get("year_month") or ""))
            return jsonify(saved.to_dict())
        except Exception as e:
            return error_response(e)

    @app.route("/salary-calculation/calculate-month", methods=["POST"], endpoint="calculate_month_salaries")
    def calculate_month_salaries():
        try:
            data = json_body()
            result = calculation.calculate_and_save_month(str(data.get("year_month") or ""))
            return jsonify(result.to_dict())
        except Exception as e:
            return error_response(e)

    @app.route("/salaries", methods=["GET"], endpoint="list_salaries")
    def list_salaries():
        try:
            return jsonify({"data": [r.to_dict() for r in records.list(_filters())]})
        except Exception as e:
            return error_response(e)

    @app.route("/salaries/<int:salary_id>", methods=["GET"], endpoint="get_salary")
    def get_salary(salary_id: int):
        try:
            return jsonify(records.get_by_id(salary_id).to_dict())
        except Exception as e:
            return error_response(e)

    @app.route("/salaries", methods=["POST"], endpoint="create_salary")
    def create_salary():
        try:
            return jsonify(records.create(json_body()).to_dict()), 201
        except Exception as e:
            return error_response(e)

    @app.route("/salaries/<int:salary_id>", methods=["PUT"], endpoint="update_salary")
    def update_salary(salary_id: int):
        try:
            return jsonify(records.update(salary_id, json_body()).to_dict())
        except Exception as e:
            return error_response(e)

    @app.route("/salaries/<int:salary_id>", methods=["DELETE"], endpoint="delete_salary")
    def delete_salary(salary_id: int):
        try:
            records.delete(salary_id)
            return jsonify({"message": "Deleted"})
        except Exception as e:
            return error_response(e)
