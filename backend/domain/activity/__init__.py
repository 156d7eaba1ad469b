"""Activity domain package.

Struttura domain-driven per il tracking delle attività:

Layers:
  * model: entity Activity + enum ActivityType
  * repository: porta astratta verso la persistenza (IActivityRepository)
  * application: ActivityService (orchestrazione use case)
  * exceptions: errori di dominio e di infrastruttura esposti ai chiamanti
"""

from __future__ import annotations

__all__: list[str] = []
