from __future__ import annotations

from crimelog.core.classify import category_from_nature
from crimelog.core.records import Category, Incident

SAMPLE_LINES = [
    "2024-00001,Theft,01/02/2024 10:00,01/01/2024 22:00,Hill Center,Closed,ACADEMIC",
    "2024-00002,Simple Assault,01/03/2024 01:15,01/03/2024 01:00,Davidson Hall,Arrest,RESIDENTIAL",
    "2024-00003,Criminal Mischief,01/04/2024 09:30,01/03/2024 23:45,Lot 60,Open,PARKING LOT",
    "2024-00004,Defiant Trespass,01/05/2024 14:00,01/05/2024 13:50,College Ave Gym,Closed,RECREATION",
    "2024-00005,Fire Alarm,01/06/2024 08:00,01/06/2024 08:00,Brower Commons,Closed,CAMPUS SERVICES",
    "2024-00006,Burglary,01/07/2024 17:20,01/07/2024 12:00,Easton Ave,Open,STREET/ROADWAY",
    "2024-00007,Liquor Law Violation,01/08/2024 02:10,01/08/2024 02:00,Demarest Hall,Referred,RESIDENTIAL",
]


def make_incident(
    incident_id: str,
    *,
    nature: str = "Theft",
    general_location: str = "ACADEMIC",
    category: Category | None = None,
) -> Incident:
    return Incident(
        incident_id=incident_id,
        nature=nature,
        report_date="01/01/2024 00:00",
        occurrence_date="01/01/2024 00:00",
        location="Somewhere",
        disposition="Closed",
        general_location=general_location,
        category=category if category is not None else category_from_nature(nature),
    )
