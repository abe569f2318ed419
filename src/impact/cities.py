"""
Static registry of major metropolitan areas.

Each city is a disc of uniform density (population over pi * radius^2).
The table is an immutable tuple shared by every estimator.
"""

from typing import Tuple

from core.models import CityRecord

MAJOR_CITIES: Tuple[CityRecord, ...] = (
    CityRecord('Tokyo', 35.6762, 139.6503, 37400000, 40),
    CityRecord('Delhi', 28.7041, 77.1025, 30300000, 35),
    CityRecord('Shanghai', 31.2304, 121.4737, 27100000, 35),
    CityRecord('São Paulo', -23.5505, -46.6333, 22000000, 30),
    CityRecord('Mexico City', 19.4326, -99.1332, 21800000, 30),
    CityRecord('Cairo', 30.0444, 31.2357, 20900000, 30),
    CityRecord('Mumbai', 19.0760, 72.8777, 20400000, 25),
    CityRecord('Beijing', 39.9042, 116.4074, 20400000, 30),
    CityRecord('Dhaka', 23.8103, 90.4125, 21000000, 25),
    CityRecord('Osaka', 34.6937, 135.5023, 19300000, 25),
    CityRecord('Seoul', 37.5665, 126.9780, 25600000, 30),
    CityRecord('New York', 40.7128, -74.0060, 18800000, 30),
    CityRecord('Karachi', 24.8607, 67.0011, 16000000, 25),
    CityRecord('Buenos Aires', -34.6037, -58.3816, 15000000, 25),
    CityRecord('Istanbul', 41.0082, 28.9784, 15400000, 25),
    CityRecord('Kolkata', 22.5726, 88.3639, 14900000, 20),
    CityRecord('Manila', 14.5995, 120.9842, 13900000, 20),
    CityRecord('Lagos', 6.5244, 3.3792, 14000000, 20),
    CityRecord('Rio de Janeiro', -22.9068, -43.1729, 13500000, 20),
    CityRecord('Guangzhou', 23.1291, 113.2644, 13100000, 20),
    CityRecord('Los Angeles', 34.0522, -118.2437, 12400000, 25),
    CityRecord('Moscow', 55.7558, 37.6173, 12500000, 25),
    CityRecord('Paris', 48.8566, 2.3522, 11000000, 20),
    CityRecord('London', 51.5074, -0.1278, 9500000, 20),
    CityRecord('Chicago', 41.8781, -87.6298, 8900000, 20),
    CityRecord('Bangalore', 12.9716, 77.5946, 12300000, 20),
    CityRecord('Toronto', 43.6532, -79.3832, 6200000, 15),
    CityRecord('Montreal', 45.5017, -73.5673, 4200000, 15),
    CityRecord('Vancouver', 49.2827, -123.1207, 2600000, 12),
    CityRecord('Sydney', -33.8688, 151.2093, 5300000, 15),
    CityRecord('Melbourne', -37.8136, 144.9631, 5000000, 15),
    CityRecord('Berlin', 52.5200, 13.4050, 3800000, 15),
    CityRecord('Madrid', 40.4168, -3.7038, 6600000, 15),
    CityRecord('Rome', 41.9028, 12.4964, 4300000, 15),
    CityRecord('Barcelona', 41.3874, 2.1686, 5600000, 15),
    CityRecord('San Francisco', 37.7749, -122.4194, 4700000, 15),
    CityRecord('Seattle', 47.6062, -122.3321, 4000000, 15),
    CityRecord('Boston', 42.3601, -71.0589, 4900000, 15),
    CityRecord('Miami', 25.7617, -80.1918, 6200000, 15),
    CityRecord('Atlanta', 33.7490, -84.3880, 6000000, 15),
    CityRecord('Washington DC', 38.9072, -77.0369, 6300000, 15),
    CityRecord('Houston', 29.7604, -95.3698, 7100000, 18),
    CityRecord('Dallas', 32.7767, -96.7970, 7600000, 18),
    CityRecord('Philadelphia', 39.9526, -75.1652, 6200000, 15),
    CityRecord('Phoenix', 33.4484, -112.0740, 4900000, 15),
)
