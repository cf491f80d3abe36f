"""
Heuristic exam outcome predictor.

Turns the aggregated study metrics from ``logic.scoring`` into stage
scores, a paper-wise breakdown, an all-India rank estimate and a
qualification probability. The rank and paper scores are drawn from
bands; the draw comes from a ``random.Random`` seeded by the caller so a
given seed always reproduces the same prediction.
"""
import random
from datetime import date
from statistics import fmean
from typing import Dict, List, Optional

from config import EXAM_DATE
from logic.scoring import clip, exam_readiness

TOTAL_REGISTRATIONS = 1_000_000

# General category cut-offs by year
CUTOFFS = {
    2023: {"prelims": 75.41, "mains": 741, "final": 953},
    2022: {"prelims": 88.22, "mains": 748, "final": 960},
    2021: {"prelims": 87.54, "mains": 745, "final": 953},
    2020: {"prelims": 92.51, "mains": 736, "final": 944},
    2019: {"prelims": 98.00, "mains": 751, "final": 961},
    2018: {"prelims": 98.00, "mains": 774, "final": 982},
    2017: {"prelims": 105.34, "mains": 809, "final": 1006},
}

# (margin over mean final cut-off, lowest rank, highest rank)
RANK_BANDS = [
    (100, 1, 100),
    (50, 100, 599),
    (0, 600, 2599),
    (-50, 2600, 12599),
    (-100, 12600, 62599),
    (None, 62600, 462599),
]

# typical marks: (average low, average high), (topper low, topper high)
PAPER_BANDS = {
    "essay": ((80, 130), (150, 180)),
    "gs1": ((70, 120), (130, 150)),
    "gs2": ((65, 110), (125, 145)),
    "gs3": ((75, 125), (135, 155)),
    "gs4": ((60, 105), (120, 140)),
    "optional": ((180, 280), (350, 450)),
}
PAPER_FLOOR = 40

FALLBACK_PREDICTION = {
    "exam_readiness": 72,
    "stage_scores": {"prelims": 118, "mains": 850, "interview": 170},
    "paper_scores": {},
    "final_total": 1020,
    "overall_rank": 450,
    "percentile": 99.96,
    "qualification_probability": 66.0,
    "recommendations": [
        "Increase current affairs study time by 30 minutes daily",
        "Focus on answer writing practice for mains",
        "Solve more sectional tests for prelims",
    ],
    "risk_factors": [
        "Current affairs coverage below optimal",
        "Mains answer writing needs improvement",
    ],
    "time_to_exam": 180,
    "confidence_level": "medium",
    "data_quality": "low",
    "fallback": True,
}


def mean_cutoff(stage: str) -> float:
    return fmean(c[stage] for c in CUTOFFS.values())


def stage_scores(readiness: float, accuracy: float, mood: float) -> Dict[str, int]:
    prelims = clip(round(2 * (0.7 * readiness + 0.3 * accuracy)), 50, 200)
    mains = clip(round(600 + (readiness - 50) * 6), 400, 1200)
    interview = clip(round(150 + (readiness - 50) * 0.8 + (mood - 50) * 0.2), 100, 230)
    return {"prelims": int(prelims), "mains": int(mains), "interview": int(interview)}


def paper_score(paper: str, completion: float, test_score: float, rng: random.Random) -> int:
    (avg_low, avg_high), (top_low, top_high) = PAPER_BANDS[paper]
    base = completion * 0.6 + test_score * 0.4

    if base >= 90:
        return rng.randint(top_low, top_high)
    elif base >= 75:
        return rng.randint(avg_high, top_low)
    elif base >= 60:
        return rng.randint(avg_low, avg_high)
    else:
        return rng.randint(PAPER_FLOOR, avg_low)


def paper_scores(completion: float, test_score: float, rng: random.Random) -> Dict[str, int]:
    return {paper: paper_score(paper, completion, test_score, rng) for paper in PAPER_BANDS}


def rank_band(final_total: float):
    margin = final_total - mean_cutoff("final")
    for threshold, low, high in RANK_BANDS:
        if threshold is None or margin >= threshold:
            return low, high


def estimate_rank(final_total: float, rng: random.Random) -> int:
    low, high = rank_band(final_total)
    return rng.randint(low, high)


def qualification_probability(rank: int, prelims: float, readiness: float) -> float:
    if rank <= 1000:
        probability = min(95, 60 + (1000 - rank) / 25)
    elif rank <= 3000:
        probability = max(20, 60 - (rank - 1000) / 100)
    elif rank <= 10000:
        probability = max(5, 20 - (rank - 3000) / 350)
    else:
        probability = max(1, 5 - (rank - 10000) / 10000)

    if prelims < mean_cutoff("prelims"):
        probability /= 2
    if readiness < 40:
        probability = min(probability, 10)
    return round(probability, 1)


def confidence_level(readiness: float, study_days: int) -> str:
    if readiness >= 80 and study_days >= 20:
        return "high"
    if readiness < 50 or study_days < 10:
        return "low"
    return "medium"


def recommendations(metrics: Dict) -> List[str]:
    recs = []
    if metrics["completion"] < 60:
        recs.append("Focus on completing more syllabus coverage")
    if metrics["test_score"] < 70:
        recs.append("Increase practice test frequency and analyze mistakes")
    if metrics["avg_daily_hours"] < 6:
        recs.append("Increase daily study hours to at least 6-8 hours")
    if metrics["study_days"] < 20:
        recs.append("Maintain consistent daily study routine")
    if metrics["accuracy"] and metrics["accuracy"] < 60:
        recs.append("Revisit concepts behind wrongly answered practice questions")
    return recs or [
        "Continue your current study pattern",
        "Focus on revision and practice tests",
        "Maintain consistent study schedule",
    ]


def risk_factors(metrics: Dict, readiness: float, time_to_exam: int) -> List[str]:
    risks = []
    if metrics["completion"] < 50:
        risks.append("Syllabus completion is behind schedule")
    if metrics["test_score"] < 60:
        risks.append("Test performance needs significant improvement")
    if time_to_exam < 100 and readiness < 70:
        risks.append("Limited time remaining for preparation")
    if metrics["mood"] < 40:
        risks.append("Low mood trend may affect preparation")
    return risks or ["No major risk factors identified"]


def data_quality(metrics: Dict) -> str:
    points = metrics["study_days"] + metrics["tests_taken"]
    if points >= 50:
        return "high"
    if points >= 20:
        return "medium"
    return "low"


def predict(metrics: Dict, seed: Optional[int] = None, today: Optional[date] = None) -> Dict:
    rng = random.Random(seed)
    today = today or date.today()

    readiness = exam_readiness(metrics)
    stages = stage_scores(readiness, metrics["accuracy"], metrics["mood"])
    papers = paper_scores(metrics["completion"], metrics["test_score"], rng)

    final_total = stages["mains"] + stages["interview"]
    rank = estimate_rank(final_total, rng)
    time_to_exam = (EXAM_DATE - today).days

    return {
        "exam_readiness": round(readiness),
        "stage_scores": stages,
        "paper_scores": papers,
        "final_total": final_total,
        "overall_rank": rank,
        "percentile": round((1 - rank / TOTAL_REGISTRATIONS) * 100, 2),
        "qualification_probability": qualification_probability(rank, stages["prelims"], readiness),
        "recommendations": recommendations(metrics),
        "risk_factors": risk_factors(metrics, readiness, time_to_exam),
        "time_to_exam": time_to_exam,
        "confidence_level": confidence_level(readiness, metrics["study_days"]),
        "data_quality": data_quality(metrics),
        "seed": seed,
        "fallback": False,
    }
