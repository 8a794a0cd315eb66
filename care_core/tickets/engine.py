# Nombre de archivo: engine.py
# Ubicación de archivo: care_core/tickets/engine.py
# Descripción: Motor de agregación de series (mes, año, SLA, CSAT, rankings y heatmaps)
"""Motor de agregación del dashboard.

Todas las funciones son puras sobre una lista de tickets ya filtrada; el
orden de las series es determinístico (meses lexicográficos, años
numéricos, rankings descendentes con empates en orden de aparición).
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Dict, List, Optional, Sequence

import pandas as pd
from pandas import DataFrame

from .config import DAY_LABELS, EMPTY_LABEL, HEATMAP_MONTHS, OTHERS_LABEL, TOP_ASSIGNEES, TOP_ORGANIZATIONS
from .schemas import (
    AggregateBundle,
    CsatYear,
    HourHeatmap,
    MonthCount,
    RankItem,
    SlaYear,
    StatusHeatmap,
    StatusHeatmapRow,
    Ticket,
    WeekHeatmap,
    YearCount,
    YearStatusCounts,
)

_FRAME_COLUMNS = [
    "key",
    "organization",
    "status",
    "assignee",
    "created_at",
    "year",
    "month",
    "breached",
    "satisfaction",
]


def pct(numerador: float, denominador: float) -> float:
    """Porcentaje con la convención ``0`` cuando el total es cero."""

    if not denominador:
        return 0.0
    return numerador / denominador * 100


def tickets_frame(tickets: Sequence[Ticket]) -> DataFrame:
    """Arma un DataFrame tipado a partir de los tickets."""

    data = pd.DataFrame(
        [
            {
                "key": t.key,
                "organization": t.organization,
                "status": t.status,
                "assignee": t.assignee,
                "created_at": t.created_at,
                "year": t.year,
                "month": t.month,
                "breached": t.breached,
                "satisfaction": t.satisfaction,
            }
            for t in tickets
        ],
        columns=_FRAME_COLUMNS,
    )
    data["created_at"] = pd.to_datetime(data["created_at"])
    data["satisfaction"] = pd.to_numeric(data["satisfaction"], errors="coerce")
    data["breached"] = data["breached"].astype(bool)
    data["status_label"] = data["status"].where(data["status"] != "", EMPTY_LABEL)
    return data


def rank_counts(values: Iterable[str], limit: Optional[int] = None) -> List[RankItem]:
    """Conteo descendente; los empates conservan el orden de aparición."""

    conteo: Dict[str, int] = {}
    for value in values:
        clave = (value or "").strip() or EMPTY_LABEL
        conteo[clave] = conteo.get(clave, 0) + 1
    ordenado = sorted(conteo.items(), key=lambda item: -item[1])
    if limit is not None:
        ordenado = ordenado[:limit]
    return [RankItem(name=name, tickets=count) for name, count in ordenado]


def top_organizations(tickets: Sequence[Ticket], limit: int = TOP_ORGANIZATIONS) -> List[RankItem]:
    """Top de organizaciones más un bucket ``Others`` con el resto."""

    top = rank_counts((t.organization for t in tickets), limit=limit)
    others = len(tickets) - sum(item.tickets for item in top)
    if others > 0:
        top.append(RankItem(name=OTHERS_LABEL, tickets=others))
    return top


def _por_mes(data: DataFrame) -> List[MonthCount]:
    counts = data.groupby("month", sort=True).size()
    return [MonthCount(month=str(month), tickets=int(n)) for month, n in counts.items()]


def _por_anio(data: DataFrame) -> List[YearCount]:
    counts = data.groupby("year", sort=True).size()
    ultimo = data["created_at"].max()
    anio_parcial = not (ultimo.month == 12 and ultimo.day == 31)

    resultado: List[YearCount] = []
    for year, n in counts.items():
        parcial = anio_parcial and int(year) == ultimo.year
        resultado.append(
            YearCount(
                year=int(year),
                tickets=int(n),
                partial=parcial,
                partial_through=ultimo.date() if parcial else None,
            )
        )
    return resultado


def _estado_por_anio(data: DataFrame) -> List[YearStatusCounts]:
    grouped = data.groupby(["year", "status_label"], sort=True).size()
    por_anio: Dict[int, Dict[str, int]] = {}
    for (year, estado), n in grouped.items():
        por_anio.setdefault(int(year), {})[str(estado)] = int(n)
    return [YearStatusCounts(year=year, counts=counts) for year, counts in sorted(por_anio.items())]


def _sla_por_anio(data: DataFrame) -> List[SlaYear]:
    resumen = data.groupby("year", sort=True).agg(
        total=("breached", "size"),
        breached=("breached", "sum"),
    )
    resultado: List[SlaYear] = []
    for year, fila in resumen.iterrows():
        total = int(fila["total"])
        incumplidos = int(fila["breached"])
        cumplidos = total - incumplidos
        resultado.append(
            SlaYear(
                year=int(year),
                total=total,
                compliant=cumplidos,
                breached=incumplidos,
                compliant_pct=pct(cumplidos, total),
                breached_pct=pct(incumplidos, total),
            )
        )
    return resultado


def _csat_por_anio(data: DataFrame) -> List[CsatYear]:
    resumen = data.groupby("year", sort=True).agg(
        total=("satisfaction", "size"),
        responses=("satisfaction", "count"),
        avg=("satisfaction", "mean"),
    )
    resultado: List[CsatYear] = []
    for year, fila in resumen.iterrows():
        total = int(fila["total"])
        respuestas = int(fila["responses"])
        promedio = None if pd.isna(fila["avg"]) else float(fila["avg"])
        resultado.append(
            CsatYear(
                year=int(year),
                csat_avg=promedio,
                responses=respuestas,
                total=total,
                coverage_pct=pct(respuestas, total),
            )
        )
    return resultado


def _heatmap_estados(data: DataFrame, meses: int = HEATMAP_MONTHS) -> StatusHeatmap:
    tabla = pd.crosstab(data["month"], data["status_label"]).sort_index()
    estados = sorted(str(col) for col in tabla.columns)
    ultimos = tabla.tail(meses)

    filas = [
        StatusHeatmapRow(month=str(month), counts={estado: int(fila[estado]) for estado in estados})
        for month, fila in ultimos.iterrows()
    ]
    maximo = max((n for fila in filas for n in fila.counts.values()), default=0)
    rango = f"{filas[0].month} → {filas[-1].month}" if filas else "—"
    return StatusHeatmap(states=estados, rows=filas, max=maximo, range=rango)


def _heatmap_horas(data: DataFrame) -> HourHeatmap:
    horas = data["created_at"].dt.hour.value_counts()
    counts = [int(horas.get(hour, 0)) for hour in range(24)]
    return HourHeatmap(counts=counts, max=max(counts))


def _heatmap_semana(data: DataFrame) -> WeekHeatmap:
    # pandas ya indexa lunes=0 ... domingo=6
    dias = data["created_at"].dt.weekday.rename("weekday")
    horas = data["created_at"].dt.hour.rename("hour")
    grouped = data.groupby([dias, horas]).size()
    matrix = [[0] * 24 for _ in range(7)]
    for (dia, hora), n in grouped.items():
        matrix[int(dia)][int(hora)] = int(n)
    maximo = max(max(fila) for fila in matrix)
    return WeekHeatmap(days=list(DAY_LABELS), matrix=matrix, max=maximo)


def _bundle_vacio() -> AggregateBundle:
    return AggregateBundle(
        total=0,
        tickets_by_month=[],
        tickets_by_year=[],
        status_by_year=[],
        sla_by_year=[],
        csat_by_year=[],
        top_assignees=[],
        top_organizations=[],
        status_heatmap=StatusHeatmap(states=[], rows=[], max=0, range="—"),
        hour_heatmap=HourHeatmap(counts=[0] * 24, max=0),
        week_heatmap=WeekHeatmap(days=list(DAY_LABELS), matrix=[[0] * 24 for _ in range(7)], max=0),
    )


def aggregate(tickets: Sequence[Ticket]) -> AggregateBundle:
    """Calcula todas las series del dashboard para los tickets recibidos."""

    if isinstance(tickets, (str, bytes)) or not isinstance(tickets, Iterable):
        raise TypeError("Se esperaba una secuencia de tickets")
    lista = list(tickets)
    if not lista:
        return _bundle_vacio()

    data = tickets_frame(lista)
    return AggregateBundle(
        total=len(lista),
        tickets_by_month=_por_mes(data),
        tickets_by_year=_por_anio(data),
        status_by_year=_estado_por_anio(data),
        sla_by_year=_sla_por_anio(data),
        csat_by_year=_csat_por_anio(data),
        top_assignees=rank_counts((t.assignee for t in lista), limit=TOP_ASSIGNEES),
        top_organizations=top_organizations(lista),
        status_heatmap=_heatmap_estados(data),
        hour_heatmap=_heatmap_horas(data),
        week_heatmap=_heatmap_semana(data),
    )
