from pydantic import BaseModel
from typing import Dict

K_FACTOR = 32
START_RATING = 1200.0


class EloRating(BaseModel):
    name: str
    rating: float = START_RATING
    matches_played: int = 0
    wins: int = 0
    losses: int = 0
    draws: int = 0


def get_or_create_rating(ratings: Dict[str, EloRating], name: str) -> EloRating:
    rating_obj = ratings.get(name)
    if rating_obj is None:
        rating_obj = EloRating(name=name)
        ratings[name] = rating_obj
    return rating_obj


def calculate_expected_score(rating_a: float, rating_b: float) -> float:
    return 1 / (1 + 10 ** ((rating_b - rating_a) / 400))


def update_elo(ratings: Dict[str, EloRating], player_a: str, player_b: str, winner_id: int):
    """
    Updates ratings for both players after a match.
    winner_id: 1 (player A), 2 (player B), or 0 (Draw)
    """
    # 1. Fetch Current Ratings
    a = get_or_create_rating(ratings, player_a)
    b = get_or_create_rating(ratings, player_b)

    # 2. Calculate Expected Scores
    expected_a = calculate_expected_score(a.rating, b.rating)
    expected_b = calculate_expected_score(b.rating, a.rating)

    # 3. Determine Actual Scores
    if winner_id == 1:
        score_a, score_b = 1.0, 0.0
        a.wins += 1
        b.losses += 1
    elif winner_id == 2:
        score_a, score_b = 0.0, 1.0
        a.losses += 1
        b.wins += 1
    else:
        score_a, score_b = 0.5, 0.5
        a.draws += 1
        b.draws += 1

    # 4. Update Ratings
    a.rating += K_FACTOR * (score_a - expected_a)
    b.rating += K_FACTOR * (score_b - expected_b)
    a.matches_played += 1
    b.matches_played += 1
