# setup_db.py
import logging

from db import Base, SessionLocal, engine
from config import DEFAULT_USER_ID
from models.user import User
from models.subject_progress import SubjectProgress
from models.daily_goal import DailyGoal
from models.test_record import TestRecord
from models.mood_entry import MoodEntry
from models.section_progress import OptionalProgress, PsirProgress
from models.current_affairs import CurrentAffairs
from models.essay_progress import EssayProgress
from models.question import Question, QuestionAttempt
from models.user_progress import UserProgress
from models.evaluation import EssayEvaluation, AnswerEvaluation
from models.ai_log import ChatHistory, SmartNote, MotivationQuote
from models.study_note import StudyNote
from models.study_session import StudySession

logger = logging.getLogger(__name__)

SEED_QUESTIONS = [
    {
        "subject": "Polity & Governance",
        "topic": "Constitutional Bodies",
        "question": "Which of the following is the constitutional body responsible for conducting elections in India?",
        "options": ["Election Commission of India", "Central Election Committee", "National Election Board", "Supreme Court of India"],
        "correct_answer": "A",
        "explanation": "The Election Commission of India is established under Article 324 of the Constitution to conduct free and fair elections.",
        "difficulty": "easy",
    },
    {
        "subject": "Economics",
        "topic": "Agriculture & Allied Sectors",
        "question": "The term 'Blue Revolution' in India is related to:",
        "options": ["Milk production", "Fish production", "Wheat production", "Cotton production"],
        "correct_answer": "B",
        "explanation": "Blue Revolution refers to the rapid increase in fish production through scientific methods and modern technology.",
        "difficulty": "medium",
    },
    {
        "subject": "Science & Technology",
        "topic": "Space Technology",
        "question": (
            "Consider the following statements about India's recent space missions:\n"
            "1. Chandrayaan-3 landed near the Moon's south pole region\n"
            "2. Aditya-L1 is India's first solar mission\n"
            "3. India was the first country to soft-land on the Moon"
        ),
        "options": ["Only 1 and 2", "Only 2 and 3", "Only 1 and 3", "All of the above"],
        "correct_answer": "A",
        "explanation": "India became the fourth country, after the USSR, USA and China, to achieve a lunar soft landing.",
        "difficulty": "hard",
    },
]


def seed(db):
    """Insert the default user and the starter question bank if missing."""
    if db.get(User, DEFAULT_USER_ID) is None:
        db.add(User(id=DEFAULT_USER_ID, email="user@example.com", name="UPSC Aspirant"))

    if db.query(Question).count() == 0:
        for q in SEED_QUESTIONS:
            db.add(Question(year=2024, exam_type="prelims", **q))

    db.commit()


def init_db(bind=engine, session_factory=SessionLocal):
    logger.info("Creating tables...")
    Base.metadata.create_all(bind=bind)

    db = session_factory()
    try:
        seed(db)
    finally:
        db.close()
    logger.info("Database ready.")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    init_db()
