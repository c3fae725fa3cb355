# seed_demo.py
from db import SessionLocal, engine
from models import Base, Book, Mentor, User
from utils import hash_password

Base.metadata.create_all(bind=engine)


def seed():
    db = SessionLocal()
    try:
        # check if any users
        if db.query(User).count() > 0:
            print("DB already seeded")
            return
        demo_users = [
            {"name": "Admin", "email": "admin@demo.com", "password": "password", "role": "admin", "college": "Demo College"},
            {"name": "Alice Mentor", "email": "alice@demo.com", "password": "password", "role": "mentor", "college": "Demo College", "year": "4"},
            {"name": "Bob Mentor", "email": "bob@demo.com", "password": "password", "role": "mentor", "college": "Demo College", "year": "3"},
            {"name": "Student One", "email": "s1@demo.com", "password": "password", "role": "student", "college": "Demo College", "year": "1"},
            {"name": "Student Two", "email": "s2@demo.com", "password": "password", "role": "student", "college": "Demo College", "year": "2"},
        ]
        users = {}
        for u in demo_users:
            user = User(
                name=u["name"], email=u["email"],
                password=hash_password(u["password"]),
                role=u["role"],
                college=u.get("college", ""),
                year=u.get("year", ""),
            )
            db.add(user)
            users[u["email"]] = user
        db.flush()

        db.add_all([
            Mentor(user_id=users["alice@demo.com"].id, subjects=["Mathematics", "Physics"],
                   bio="Final year student, happy to help with calculus and mechanics.", hourly_rate=200),
            Mentor(user_id=users["bob@demo.com"].id, subjects=["Chemistry"],
                   bio="Organic chemistry nerd.", availability="Busy"),
        ])
        db.add_all([
            Book(title="Linear Algebra Done Right", author="Sheldon Axler", subject="Mathematics",
                 condition="Like New", price=450, rental_price=60, location="Hostel A",
                 owner_id=users["s1@demo.com"].id),
            Book(title="Concepts of Physics", author="H. C. Verma", subject="Physics",
                 price=300, rental_price=40, location="Library gate",
                 owner_id=users["s2@demo.com"].id),
        ])
        db.commit()
        print("Seed complete")
    finally:
        db.close()


if __name__ == "__main__":
    seed()
