from collections import Counter, OrderedDict
from datetime import date, timedelta
from typing import Dict, List, Optional

from models.mood_entry import MOOD_SCORES
from logic.scoring import (
    NEUTRAL_MOOD,
    as_date,
    clip,
    daily_hours,
    mood_score,
    percent,
    subject_completion,
)

LOOKBACK_DAYS = 90
TARGET_TOTAL_HOURS = 500

OUTLOOK_WEIGHTS = {
    "completion": 0.18,
    "active_days": 0.16,
    "test_score": 0.16,
    "optional": 0.25,
    "current_affairs": 0.10,
    "essay": 0.10,
    "mood": 0.03,
    "hours": 0.02,
}


def subject_breakdown(subjects: List[Dict]) -> List[Dict]:
    return [
        {
            "id": s.get("id"),
            "subject": s.get("subject"),
            "category": s.get("category"),
            "progress": round(subject_completion(s)),
            "lecture_progress": round(percent(s.get("completed_lectures"), s.get("total_lectures"))),
            "dpp_progress": round(percent(s.get("completed_dpps"), s.get("total_dpps"))),
        }
        for s in subjects
    ]


def active_day_ratio(goals: List[Dict], today: date, days: int = LOOKBACK_DAYS) -> int:
    start = today - timedelta(days=days)
    active = [d for d in daily_hours(goals) if start < d <= today]
    return round(len(active) / days * 100)


def mood_analysis(moods: List[Dict]) -> Dict:
    if not moods:
        return {"average_score": NEUTRAL_MOOD, "distribution": {}, "trend": "neutral"}

    average = mood_score(moods)
    return {
        "average_score": round(average, 1),
        "distribution": dict(Counter(m["mood"] for m in moods)),
        "trend": "positive" if average > 60 else "needs_attention",
    }


def weak_areas(breakdown: List[Dict], metrics: Dict, active_days: int) -> List[Dict]:
    areas = []

    for s in breakdown:
        if s["progress"] < 30:
            areas.append({
                "subject": s["subject"],
                "category": s["category"],
                "progress": s["progress"],
                "priority": "high" if s["progress"] < 15 else "medium",
                "reason": "Low completion rate",
            })

    if metrics["current_affairs"] < 25:
        areas.append({
            "subject": "Current Affairs",
            "category": "Special",
            "progress": round(metrics["current_affairs"]),
            "priority": "high",
            "reason": "Critical for both Prelims and Mains",
        })
    if metrics["essay"] < 30:
        areas.append({
            "subject": "Essay",
            "category": "Essay",
            "progress": round(metrics["essay"]),
            "priority": "medium",
            "reason": "Foundation for essay writing",
        })
    if metrics["optional"] < 25:
        areas.append({
            "subject": "Optional Subject",
            "category": "Optional",
            "progress": round(metrics["optional"]),
            "priority": "high",
            "reason": "Optional subject crucial for Mains",
        })
    if active_days < 50:
        areas.append({
            "subject": "Study Consistency",
            "category": "Habit",
            "progress": active_days,
            "priority": "high",
            "reason": "Irregular study pattern detected",
        })

    # high priority first, then least progress first
    return sorted(areas, key=lambda a: (a["priority"] != "high", a["progress"]))


def monthly_trend(goals: List[Dict], tests: List[Dict], months: int = 6) -> List[Dict]:
    buckets = {}

    def bucket(day):
        key = day.strftime("%Y-%m")
        if key not in buckets:
            buckets[key] = {"month": day.strftime("%b"), "hours": 0.0, "topics": 0, "score": 0.0, "test_count": 0}
        return buckets[key]

    for g in goals:
        entry = bucket(as_date(g["date"]))
        entry["hours"] += float(g.get("hours_studied") or 0)
        entry["topics"] += int(g.get("topics_covered") or 0)

    for t in tests:
        if not t.get("attempt_date") or not t.get("total_marks"):
            continue
        entry = bucket(as_date(t["attempt_date"]))
        entry["score"] += percent(t.get("scored_marks"), t["total_marks"])
        entry["test_count"] += 1

    trend = []
    for key in sorted(buckets)[-months:]:
        entry = buckets[key]
        if entry["test_count"]:
            entry["score"] = round(entry["score"] / entry["test_count"])
        entry["hours"] = round(entry["hours"])
        trend.append(entry)
    return trend


def outlook(metrics: Dict, active_days: int) -> Dict:
    """Weighted preparation score with a short narrative, for the analytics dashboard."""
    inputs = {
        "completion": metrics["completion"],
        "active_days": active_days,
        "test_score": metrics["test_score"],
        "optional": metrics["optional"],
        "current_affairs": metrics["current_affairs"],
        "essay": metrics["essay"],
        "mood": metrics["mood"],
        "hours": min(metrics["total_hours"] / TARGET_TOTAL_HOURS, 1) * 100,
    }
    score = round(clip(sum(inputs[k] * w for k, w in OUTLOOK_WEIGHTS.items())))

    if active_days > 70 and metrics["avg_daily_hours"] > 4:
        trend = "improving"
    elif active_days < 50 or metrics["avg_daily_hours"] < 2:
        trend = "declining"
    else:
        trend = "stable"

    filled = sum(1 for k in ("completion", "active_days", "test_score", "optional", "current_affairs", "essay") if inputs[k] > 0)
    confidence = round(filled / 6 * 100)

    if score >= 70:
        verdict = "you're on an excellent track with strong performance across multiple areas."
    elif score >= 50:
        verdict = "you're making good progress but there's room for improvement in key areas."
    else:
        verdict = "your preparation needs significant enhancement to meet exam standards."
    reasoning = (
        f"Based on your preparation data, {verdict} "
        f"Your study consistency of {active_days}% and average subject progress of "
        f"{round(metrics['completion'])}% are key factors in this assessment."
    )

    recs = []
    if active_days < 70:
        recs.append("Establish a consistent daily study routine. Aim for at least 6 days per week.")
    if metrics["avg_daily_hours"] < 4:
        recs.append("Increase daily study hours to 4-6 hours.")
    if metrics["completion"] < 40:
        recs.append("Focus on completing basic lectures before moving to advanced topics.")
    if metrics["test_score"] < 60:
        recs.append("Increase test frequency and focus on answer writing practice.")
    if metrics["current_affairs"] < 30:
        recs.append("Dedicate 1 hour daily to current affairs.")
    if metrics["essay"] < 25:
        recs.append("Start essay writing practice. Write at least 2 essays per week.")
    if metrics["optional"] < 30:
        recs.append("Increase optional subject study time.")

    return {"score": score, "trend": trend, "confidence": confidence, "reasoning": reasoning, "recommendations": recs}


def comprehensive(subjects, goals, tests, moods, metrics: Dict, today: Optional[date] = None) -> Dict:
    today = today or date.today()
    breakdown = subject_breakdown(subjects)
    active_days = active_day_ratio(goals, today)

    return {
        "performance_outlook": outlook(metrics, active_days),
        "overall_progress": {
            "total_subjects": len(subjects),
            "avg_subject_progress": round(metrics["completion"]),
            "total_study_hours": round(metrics["total_hours"]),
            "avg_test_score": round(metrics["test_score"]),
            "total_tests": len(tests),
            "current_affairs_progress": round(metrics["current_affairs"]),
            "essay_progress": round(metrics["essay"]),
            "optional_progress": round(metrics["optional"]),
        },
        "study_patterns": {
            "consistency": active_days,
            "avg_daily_hours": round(metrics["avg_daily_hours"], 1),
        },
        "weak_areas": weak_areas(breakdown, metrics, active_days),
        "mood_analysis": mood_analysis(moods),
        "trend_data": monthly_trend(goals, tests),
        "subject_data": breakdown[:6],
    }


def _period_summary(goals, moods, key_fn, label_fn, limit=12) -> List[Dict]:
    periods = OrderedDict()
    for g in sorted(goals, key=lambda row: as_date(row["date"])):
        day = as_date(g["date"])
        key = key_fn(day)
        if key not in periods:
            periods[key] = {"period": label_fn(day), "hours": 0.0, "questions": 0, "mood_total": 0, "mood_count": 0}
        periods[key]["hours"] += float(g.get("hours_studied") or 0)
        periods[key]["questions"] += int(g.get("questions_solved") or 0)

    for m in moods:
        key = key_fn(as_date(m["date"]))
        if key in periods:
            periods[key]["mood_total"] += MOOD_SCORES.get(m["mood"], NEUTRAL_MOOD)
            periods[key]["mood_count"] += 1

    summary = []
    for entry in list(periods.values())[-limit:]:
        summary.append({
            "period": entry["period"],
            "hours": round(entry["hours"], 1),
            "questions": entry["questions"],
            "mood_percent": round(entry["mood_total"] / entry["mood_count"]) if entry["mood_count"] else NEUTRAL_MOOD,
        })
    return summary


def weekly_summary(goals, moods) -> List[Dict]:
    def week_start(day):
        # weeks start on Sunday
        return day - timedelta(days=(day.weekday() + 1) % 7)

    return _period_summary(goals, moods, week_start, lambda day: "Week " + week_start(day).strftime("%b %d"))


def monthly_summary(goals, moods) -> List[Dict]:
    return _period_summary(goals, moods, lambda day: (day.year, day.month), lambda day: day.strftime("%b %y"))


def detailed(goals, moods, tests) -> Dict:
    total_hours = sum(float(g.get("hours_studied") or 0) for g in goals)
    total_questions = sum(int(g.get("questions_solved") or 0) for g in goals) + sum(
        int(t.get("total_marks") or 0) for t in tests
    )
    avg_mood = mood_score(moods)

    return {
        "total_questions": total_questions,
        "total_hours": round(total_hours, 1),
        "avg_mood_percent": round(avg_mood),
        "weekly_data": weekly_summary(goals, moods),
        "monthly_data": monthly_summary(goals, moods),
        "lifetime_data": {
            "period": "Lifetime",
            "hours": round(total_hours, 1),
            "questions": total_questions,
            "mood_percent": round(avg_mood),
        },
        "mood_distribution": [{"mood": mood, "count": count} for mood, count in Counter(m["mood"] for m in moods).items()],
    }


# --------- Goal rollups ---------
def _goal_totals(goals, key_fn) -> Dict:
    buckets = OrderedDict()
    for g in sorted(goals, key=lambda row: as_date(row["date"])):
        key = key_fn(as_date(g["date"]))
        entry = buckets.setdefault(key, {"hours": 0.0, "topics": 0, "questions": 0, "sessions": 0})
        entry["hours"] += float(g.get("hours_studied") or 0)
        entry["topics"] += int(g.get("topics_covered") or 0)
        entry["questions"] += int(g.get("questions_solved") or 0)
        entry["sessions"] += 1
    for entry in buckets.values():
        entry["hours"] = round(entry["hours"], 1)
    return buckets


def goal_rollups(goals: List[Dict], today: Optional[date] = None) -> Dict:
    """
    Daily goal totals for the last 30 days, ISO weeks over the last 12
    weeks, calendar months over the last 12 months, and lifetime.
    """
    today = today or date.today()
    goals = [g for g in goals if g.get("date") is not None]

    recent = [g for g in goals if as_date(g["date"]) >= today - timedelta(days=30)]
    daily = [{"date": day.isoformat(), **totals} for day, totals in _goal_totals(recent, lambda day: day).items()]

    recent = [g for g in goals if as_date(g["date"]) >= today - timedelta(weeks=12)]
    weekly = [
        {"year": year, "week": week, **totals}
        for (year, week), totals in _goal_totals(recent, lambda day: tuple(day.isocalendar())[:2]).items()
    ]

    month_index = today.year * 12 + today.month - 1 - 11
    first_month = date(month_index // 12, month_index % 12 + 1, 1)
    recent = [g for g in goals if as_date(g["date"]) >= first_month]
    monthly = [
        {"year": year, "month_num": month, **totals}
        for (year, month), totals in _goal_totals(recent, lambda day: (day.year, day.month)).items()
    ]

    days = sorted({as_date(g["date"]) for g in goals})
    lifetime = {
        "total_hours": round(sum(float(g.get("hours_studied") or 0) for g in goals), 1),
        "total_topics": sum(int(g.get("topics_covered") or 0) for g in goals),
        "total_questions": sum(int(g.get("questions_solved") or 0) for g in goals),
        "total_sessions": len(goals),
        "study_days": len(days),
        "first_study_date": days[0].isoformat() if days else None,
        "last_study_date": days[-1].isoformat() if days else None,
    }
    return {"daily": daily, "weekly": weekly, "monthly": monthly, "lifetime": lifetime}
