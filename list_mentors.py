# list_mentors.py
from db import SessionLocal, engine
from models import Mentor


def main():
    print("DB engine:", getattr(engine, "url", str(engine)))
    db = SessionLocal()
    try:
        total = db.query(Mentor).count()
        print("Total mentor profiles:", total)
        print("-" * 50)

        # same order as GET /mentors
        q = db.query(Mentor).order_by(Mentor.rating.desc(), Mentor.created_at.desc()).limit(10)
        print("Top 10 mentors (id, name, rating, ratings, subjects):")
        for m in q.all():
            print(m.id, m.user.name, round(m.rating, 2), m.total_ratings, ", ".join(m.subjects or []))
    finally:
        db.close()


if __name__ == "__main__":
    main()
