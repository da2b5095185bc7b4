from __future__ import annotations


def problem_payload(**overrides) -> dict:
    # description is exactly 25 characters
    payload = {
        "title": "Pothole on 5th Ave",
        "description": "Deep pothole by the stops",
        "location": "5th Ave & Main St",
        "coordinates": {"lat": 12.9, "lng": 77.6},
        "images": ["http://x/1.jpg"],
        "category": "Infrastructure",
    }
    payload.update(overrides)
    return payload


def solution_payload(problem_id: str, **overrides) -> dict:
    payload = {
        "description": "Fill it with cold asphalt mix this week",
        "problem": problem_id,
    }
    payload.update(overrides)
    return payload
