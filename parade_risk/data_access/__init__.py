"""Provider adapters mapping NASA POWER, Open-Meteo and Meteostat payloads to raw records."""

from parade_risk.data_access.nasa_power import records_from_nasa_power
from parade_risk.data_access.open_meteo import observation_from_open_meteo, records_from_open_meteo
from parade_risk.data_access.stations import records_from_meteostat

__all__ = [
    "records_from_nasa_power",
    "records_from_open_meteo",
    "observation_from_open_meteo",
    "records_from_meteostat",
]
