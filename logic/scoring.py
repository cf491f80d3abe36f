from collections import defaultdict
from datetime import date, datetime, timedelta
from statistics import fmean, pstdev
from typing import Dict, List, Optional

from models.mood_entry import MOOD_SCORES
from models.study_session import STUDY_SESSION_TYPES

LECTURE_WEIGHT = 0.6
PRACTICE_WEIGHT = 0.4
REVISION_BONUS_PER_ROUND = 2
REVISION_BONUS_CAP = 10

RECENT_ATTEMPTS = 50
# prelims GS paper: 100 questions in 120 minutes
TARGET_SECONDS_PER_QUESTION = 72
SPEED_PENALTY_PER_SECOND = 1.0

CONSISTENCY_WINDOW_DAYS = 14
MIN_CONSISTENCY_DAYS = 7

NEUTRAL_MOOD = 50
NEUTRAL_SPEED = 50

READINESS_WEIGHTS = {
    "completion": 0.35,
    "accuracy": 0.15,
    "speed": 0.05,
    "consistency": 0.15,
    "test_score": 0.20,
    "optional": 0.05,
    "mood": 0.05,
}


def clip(value, low=0.0, high=100.0):
    return max(low, min(high, value))


def percent(done, total):
    """Completion percentage; a zero or missing total counts as 0%."""
    if not total:
        return 0.0
    return (done or 0) / total * 100


def as_date(value) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def subject_completion(row: Dict) -> float:
    """Weighted lecture/practice completion plus a capped revision bonus."""
    lecture = percent(row.get("completed_lectures"), row.get("total_lectures"))
    practice = percent(row.get("completed_dpps"), row.get("total_dpps"))
    bonus = min((row.get("revisions") or 0) * REVISION_BONUS_PER_ROUND, REVISION_BONUS_CAP)
    return clip(lecture * LECTURE_WEIGHT + practice * PRACTICE_WEIGHT + bonus)


def overall_completion(subjects: List[Dict]) -> float:
    if not subjects:
        return 0.0
    return fmean(subject_completion(s) for s in subjects)


def accuracy(attempts: List[Dict], limit: int = RECENT_ATTEMPTS) -> float:
    """Share of correct answers over the most recent attempts (newest first)."""
    recent = attempts[:limit]
    if not recent:
        return 0.0
    correct = sum(1 for a in recent if a.get("is_correct"))
    return correct / len(recent) * 100


def speed_score(attempts: List[Dict], limit: int = RECENT_ATTEMPTS) -> float:
    times = [a["time_taken"] for a in attempts[:limit] if a.get("time_taken") is not None]
    if not times:
        return float(NEUTRAL_SPEED)
    overshoot = fmean(times) - TARGET_SECONDS_PER_QUESTION
    return clip(100 - overshoot * SPEED_PENALTY_PER_SECOND)


def daily_hours(goals: List[Dict]) -> Dict[date, float]:
    totals = defaultdict(float)
    for g in goals:
        if g.get("date") is None:
            continue
        totals[as_date(g["date"])] += float(g.get("hours_studied") or 0)
    return dict(totals)


def consistency(goals: List[Dict], window: int = CONSISTENCY_WINDOW_DAYS) -> float:
    """
    Steadiness of daily study hours over the window ending at the latest
    logged day. Days without entries count as zero hours. Uses the
    coefficient of variation: identical hours every day scores 100.
    """
    totals = daily_hours(goals)
    if not totals:
        return 0.0

    end = max(totals)
    hours = [totals.get(end - timedelta(days=offset), 0.0) for offset in range(window)]
    mean = fmean(hours)
    if mean == 0:
        return 0.0

    score = clip(100 * (1 - pstdev(hours) / mean))
    studied = sum(1 for h in hours if h > 0)
    if studied < MIN_CONSISTENCY_DAYS:
        score = min(score, studied / MIN_CONSISTENCY_DAYS * 50)
    return score


def average_test_score(tests: List[Dict]) -> float:
    scores = [percent(t.get("scored_marks"), t.get("total_marks")) for t in tests if t.get("total_marks")]
    return fmean(scores) if scores else 0.0


def mood_score(moods: List[Dict]) -> float:
    if not moods:
        return float(NEUTRAL_MOOD)
    return fmean(MOOD_SCORES.get(m.get("mood"), NEUTRAL_MOOD) for m in moods)


def section_completion(sections: List[Dict]) -> float:
    if not sections:
        return 0.0
    return fmean(percent(s.get("completed_items"), s.get("total_items")) for s in sections)


def exam_readiness(metrics: Dict) -> float:
    score = sum(metrics.get(key, 0) * weight for key, weight in READINESS_WEIGHTS.items())
    return clip(score)


def session_rows(sessions: List[Dict]) -> List[Dict]:
    """Timed study sessions as goal-shaped rows; breaks are left out."""
    rows = []
    for s in sessions:
        if s.get("session_type") not in STUDY_SESSION_TYPES or s.get("start_time") is None:
            continue
        rows.append({"date": as_date(s["start_time"]), "hours_studied": (s.get("duration_minutes") or 0) / 60})
    return rows


def collect_metrics(
    subjects: List[Dict],
    attempts: List[Dict],
    goals: List[Dict],
    tests: List[Dict],
    moods: List[Dict],
    optional_sections: Optional[List[Dict]] = None,
    psir_sections: Optional[List[Dict]] = None,
    current_affairs: Optional[Dict] = None,
    essay: Optional[Dict] = None,
    sessions: Optional[List[Dict]] = None,
) -> Dict:
    """Aggregate raw rows into the percentages the predictor works with."""
    goals = goals + session_rows(sessions or [])
    totals = daily_hours(goals)
    study_days = len(totals)
    total_hours = sum(totals.values())
    current_affairs = current_affairs or {}
    essay = essay or {}

    return {
        "completion": overall_completion(subjects),
        "accuracy": accuracy(attempts),
        "speed": speed_score(attempts),
        "consistency": consistency(goals),
        "test_score": average_test_score(tests),
        "optional": section_completion((optional_sections or []) + (psir_sections or [])),
        "mood": mood_score(moods),
        "current_affairs": percent(current_affairs.get("completed_topics"), current_affairs.get("total_topics")),
        "essay": fmean([
            percent(essay.get("lectures_completed"), essay.get("total_lectures")),
            percent(essay.get("essays_written"), essay.get("total_essays")),
        ]),
        "study_days": study_days,
        "total_hours": total_hours,
        "avg_daily_hours": total_hours / study_days if study_days else 0.0,
        "tests_taken": len(tests),
    }
