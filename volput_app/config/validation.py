"""Configuration validation utilities."""

import numbers
from dataclasses import dataclass
from datetime import date
from typing import Any


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


def _is_number(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def _is_int(value: Any) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_signal_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate rolling signal parameters."""
        errors = []

        if "window" in params:
            value = params["window"]
            if not _is_int(value) or value <= 0:
                errors.append(ValidationError(
                    field="window",
                    message="Must be a positive integer",
                    value=value
                ))

        if "percentile" in params:
            value = params["percentile"]
            if not _is_number(value) or value <= 0 or value >= 1:
                errors.append(ValidationError(
                    field="percentile",
                    message="Must be a number strictly between 0 and 1",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_trade_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate trade construction parameters."""
        errors = []

        for name in ("tenor_days", "trading_days_per_year"):
            if name in params:
                value = params[name]
                if not _is_int(value) or value <= 0:
                    errors.append(ValidationError(
                        field=name,
                        message="Must be a positive integer",
                        value=value
                    ))

        return errors

    @staticmethod
    def validate_ledger_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate account replay parameters."""
        errors = []

        if "starting_cash" in params:
            value = params["starting_cash"]
            if not _is_number(value) or value <= 0:
                errors.append(ValidationError(
                    field="starting_cash",
                    message="Must be a positive number",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_performance_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate summary statistics parameters."""
        errors = []

        if "periods_per_year" in params:
            value = params["periods_per_year"]
            if not _is_int(value) or value <= 0:
                errors.append(ValidationError(
                    field="periods_per_year",
                    message="Must be a positive integer",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_synthetic_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate synthetic generator parameters."""
        errors = []

        if "seed" in params:
            value = params["seed"]
            if not _is_int(value) or value < 0:
                errors.append(ValidationError(
                    field="seed",
                    message="Must be a non-negative integer",
                    value=value
                ))

        if "initial_price" in params:
            value = params["initial_price"]
            if not _is_number(value) or value <= 0:
                errors.append(ValidationError(
                    field="initial_price",
                    message="Must be a positive number",
                    value=value
                ))

        for name in ("step_std", "iv_std"):
            if name in params:
                value = params[name]
                if not _is_number(value) or value < 0:
                    errors.append(ValidationError(
                        field=name,
                        message="Must be a non-negative number",
                        value=value
                    ))

        # IV clamp bounds must keep every generated IV inside (0, 1]
        floor = params.get("iv_floor")
        cap = params.get("iv_cap")
        if floor is not None and (not _is_number(floor) or floor <= 0):
            errors.append(ValidationError(
                field="iv_floor",
                message="Must be a positive number",
                value=floor
            ))
        if cap is not None and (not _is_number(cap) or cap > 1):
            errors.append(ValidationError(
                field="iv_cap",
                message="Must be a number no greater than 1",
                value=cap
            ))
        if _is_number(floor) and _is_number(cap) and floor > cap:
            errors.append(ValidationError(
                field="iv_floor",
                message="Must not exceed iv_cap",
                value=floor
            ))

        start = params.get("start")
        end = params.get("end")
        if isinstance(start, date) and isinstance(end, date) and start > end:
            errors.append(ValidationError(
                field="start",
                message="Must not be after end",
                value=start
            ))

        return errors

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = []

        if "signal" in config:
            errors.extend(ConfigValidator.validate_signal_params(config["signal"]))

        if "trade" in config:
            errors.extend(ConfigValidator.validate_trade_params(config["trade"]))

        if "ledger" in config:
            errors.extend(ConfigValidator.validate_ledger_params(config["ledger"]))

        if "performance" in config:
            errors.extend(ConfigValidator.validate_performance_params(config["performance"]))

        if "synthetic" in config:
            errors.extend(ConfigValidator.validate_synthetic_params(config["synthetic"]))

        return errors
