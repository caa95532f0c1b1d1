"""Built-in demo activity catalog used by the `seed` CLI command."""

DEMO_ACTIVITIES: list[dict] = [
    # Paris
    {"destination": "Paris", "name": "Louvre Museum", "category": "culture", "duration_hours": 3, "price_level": 3, "latitude": 48.8606, "longitude": 2.3376},
    {"destination": "Paris", "name": "Eiffel Tower", "category": "culture", "duration_hours": 2, "price_level": 3, "latitude": 48.8584, "longitude": 2.2945},
    {"destination": "Paris", "name": "Montmartre Walk", "category": "nature", "duration_hours": 2, "price_level": 1, "latitude": 48.8867, "longitude": 2.3431},
    # Rome
    {"destination": "Rome", "name": "Colosseum", "category": "culture", "duration_hours": 2, "price_level": 3, "latitude": 41.8902, "longitude": 12.4922},
    {"destination": "Rome", "name": "Trastevere Food Tour", "category": "gastronomy", "duration_hours": 3, "price_level": 3, "latitude": 41.887, "longitude": 12.4663},
    {"destination": "Rome", "name": "Villa Borghese Park", "category": "nature", "duration_hours": 2, "price_level": 1, "latitude": 41.9142, "longitude": 12.4923},
    # Belgrade
    {"destination": "Belgrade", "name": "Kalemegdan Fortress", "category": "culture", "duration_hours": 2, "price_level": 1, "latitude": 44.8231, "longitude": 20.4506},
    {"destination": "Belgrade", "name": "Skadarlija Dinner", "category": "gastronomy", "duration_hours": 2, "price_level": 2, "latitude": 44.8176, "longitude": 20.4656},
    {"destination": "Belgrade", "name": "Ada Ciganlija", "category": "nature", "duration_hours": 3, "price_level": 1, "latitude": 44.7871, "longitude": 20.411},
]
