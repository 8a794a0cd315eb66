# Nombre de archivo: settings.py
# Ubicación de archivo: care_core/tickets/settings.py
# Descripción: Configuración tipada del dashboard (umbrales, roles, turnos y comparativas)
"""Modelos pydantic para la configuración que consume el núcleo.

La configuración persistida (JSON en camelCase) se resuelve una única vez con
:meth:`DashboardSettings.resolve`; el resto del paquete recibe siempre el
modelo ya validado.
"""

from __future__ import annotations

import json
import math
from pathlib import Path
from typing import Any, Dict, List, Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator, model_validator
from pydantic.alias_generators import to_camel

from .schemas import AssigneeRole

ShiftKind = Literal["normal", "guard"]


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class TppThresholds(_CamelModel):
    """Umbrales de tickets por persona; siempre quedan en orden ascendente."""

    capacity_max: float = 40.0
    optimal_max: float = 70.0
    limit_max: float = 95.0

    @field_validator("capacity_max", "optimal_max", "limit_max", mode="before")
    @classmethod
    def _numero_o_default(cls, value: Any, info: ValidationInfo) -> float:
        default = cls.model_fields[info.field_name].default
        try:
            number = float(value)
        except (TypeError, ValueError):
            return default
        return number if math.isfinite(number) else default

    @model_validator(mode="after")
    def _corregir_orden(self) -> "TppThresholds":
        if self.capacity_max > self.optimal_max:
            self.optimal_max = self.capacity_max
        if self.optimal_max > self.limit_max:
            self.limit_max = self.optimal_max
        return self


class RoleInclusion(BaseModel):
    """Roles que cuentan para la dotación (``Ignorar`` nunca cuenta)."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    guardia: bool = Field(True, alias="Guardia")
    agente: bool = Field(True, alias="Agente")
    manager_care: bool = Field(True, alias="Manager Care")


class RoleSettings(_CamelModel):
    role_map: Dict[str, AssigneeRole] = Field(default_factory=dict, alias="map")
    inclusion: RoleInclusion = Field(default_factory=RoleInclusion)
    universe: List[str] = Field(default_factory=list)

    @field_validator("universe", mode="before")
    @classmethod
    def _limpiar_universo(cls, value: Any) -> List[str]:
        if not isinstance(value, (list, tuple, set)):
            return []
        nombres: List[str] = []
        for item in value:
            name = str(item or "").strip()
            if name and name not in nombres:
                nombres.append(name)
        return nombres

    @field_validator("role_map", mode="before")
    @classmethod
    def _descartar_roles_desconocidos(cls, value: Any) -> Dict[str, str]:
        if not isinstance(value, Mapping):
            return {}
        validos = {role.value for role in AssigneeRole}
        roles: Dict[str, str] = {}
        for name, role in value.items():
            role = getattr(role, "value", role)
            if role in validos:
                roles[str(name).strip()] = role
        return roles


class CoverageShift(_CamelModel):
    """Turno de cobertura; si ``start > end`` cruza la medianoche."""

    id: str = ""
    name: str = ""
    days: List[int] = Field(default_factory=list)
    start: str
    end: str
    enabled: bool = True
    kind: ShiftKind = "normal"

    @field_validator("kind", mode="before")
    @classmethod
    def _normalizar_kind(cls, value: Any) -> str:
        if value in (None, ""):
            return "normal"
        if str(value).lower() in ("guard", "guardia"):
            return "guard"
        return str(value)

    @field_validator("days", mode="before")
    @classmethod
    def _filtrar_dias(cls, value: Any) -> List[int]:
        if not isinstance(value, (list, tuple, set)):
            return []
        dias: List[int] = []
        for item in value:
            try:
                dia = int(item)
            except (TypeError, ValueError):
                continue
            if 0 <= dia <= 6 and dia not in dias:
                dias.append(dia)
        return dias


class CompareSettings(_CamelModel):
    compare_previous: bool = True
    window_months: Literal[3, 6, 12] = Field(12, alias="compareWindowMonths")

    @field_validator("window_months", mode="before")
    @classmethod
    def _ventana_como_entero(cls, value: Any) -> Any:
        # la configuración persistida puede traer "6" o 6.0
        try:
            number = float(str(value).strip())
        except (TypeError, ValueError):
            return value
        return int(number) if number.is_integer() else value


def _legacy_shifts(legacy: Mapping[str, Any]) -> List[Dict[str, Any]]:
    """Convierte el bloque antiguo ``shifts`` (mañana/tarde/guardia)."""

    semana = [0, 1, 2, 3, 4]
    plantillas = [
        ("morning", "Turno Mañana", semana, "normal"),
        ("afternoon", "Turno Tarde", semana, "normal"),
        ("guard", "Turno Guardia", [0, 1, 2, 3, 4, 5, 6], "guard"),
    ]
    out: List[Dict[str, Any]] = []
    for key, name, days, kind in plantillas:
        shift = legacy.get(key)
        if not isinstance(shift, Mapping):
            continue
        out.append(
            {
                "id": key,
                "name": name,
                "days": days,
                "start": shift.get("start", ""),
                "end": shift.get("end", ""),
                "enabled": True,
                "kind": kind,
            }
        )
    return out


class DashboardSettings(_CamelModel):
    tpp: TppThresholds = Field(default_factory=TppThresholds)
    roles: RoleSettings = Field(default_factory=RoleSettings)
    coverage_shifts: List[CoverageShift] = Field(default_factory=list)
    compare: CompareSettings = Field(default_factory=CompareSettings)

    @classmethod
    def resolve(cls, raw: Optional[Mapping[str, Any]]) -> "DashboardSettings":
        """Resuelve la configuración persistida a un modelo único.

        - Sin ``coverageShifts`` se usan los turnos del bloque ``shifts``.
        - Sin bloque ``compare`` se leen las claves de comparación del nivel raíz.
        """

        if not raw:
            return cls()
        data = dict(raw)
        if not data.get("coverageShifts") and not data.get("coverage_shifts"):
            legacy = data.get("shifts")
            if isinstance(legacy, Mapping):
                data["coverageShifts"] = _legacy_shifts(legacy)
        if not isinstance(data.get("compare"), Mapping):
            data["compare"] = {
                key: data[key] for key in ("comparePrevious", "compareWindowMonths") if key in data
            }
        return cls.model_validate(data)

    @classmethod
    def from_json_file(cls, path: str | Path) -> "DashboardSettings":
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
        if not isinstance(raw, Mapping):
            raise ValueError(f"La configuración en {path} no es un objeto JSON")
        return cls.resolve(raw)
