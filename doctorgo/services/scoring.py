def keyword_weight(index: int, total: int) -> float:
    # earlier-listed specialties for a keyword weigh more: 1.0, then down to 1/total
    return (total - index) / total


def score_specialties(text: str, keyword_table: dict[str, list[str]]) -> dict[str, float]:
    """
    Sum keyword weights per specialty for every keyword found in the text.

    The returned dict keeps the order in which specialties were first scored.
    """
    text = (text or "").lower()
    scores: dict[str, float] = {}

    for keyword, specialties in keyword_table.items():
        if keyword.lower() not in text:
            continue
        total = len(specialties)
        for index, specialty in enumerate(specialties):
            scores[specialty] = scores.get(specialty, 0.0) + keyword_weight(index, total)

    return scores


def rank_specialties(scores: dict[str, float], limit: int) -> list[str]:
    # sorted() is stable, so equal scores keep first-encountered order
    ranked = sorted(scores.items(), key=lambda item: item[1], reverse=True)
    return [specialty for specialty, _ in ranked[:limit]]


def confidence(rank: int) -> float:
    return max(round(0.95 - rank * 0.15, 2), 0.5)
