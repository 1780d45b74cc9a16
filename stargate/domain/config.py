"""
Configuration métier transmise explicitement aux services.

Ce module définit `AppConfig`, la valeur immuable consommée par le moteur d'historique des
affectations et par la couche de validation. Aucun service ne lit de configuration globale.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, time

DEFAULT_RETIRED_DUTY_TITLE = "RETIRED"
DEFAULT_MIN_DUTY_START_DATE = datetime(1900, 1, 1)


@dataclass(frozen=True)
class AppConfig:
    """
    Paramètres métier des affectations.

    Attributs
    - retired_duty_title: intitulé de poste signalant la fin de carrière.
    - min_duty_start_date: date plancher acceptée pour un début d'affectation.
    - clear_career_end_on_reinstatement: efface `career_end_date` si une affectation non
      retraite suit une retraite (désactivé par défaut).
    """

    retired_duty_title: str = DEFAULT_RETIRED_DUTY_TITLE
    min_duty_start_date: datetime = field(default=DEFAULT_MIN_DUTY_START_DATE)
    clear_career_end_on_reinstatement: bool = False

    @classmethod
    def from_settings(cls, settings) -> AppConfig:
        """Construit la configuration métier à partir des `Settings` applicatifs."""
        return cls(
            retired_duty_title=settings.RETIRED_DUTY_TITLE,
            min_duty_start_date=datetime.combine(settings.MIN_DUTY_START_DATE, time.min),
            clear_career_end_on_reinstatement=settings.CLEAR_CAREER_END_ON_REINSTATEMENT,
        )
