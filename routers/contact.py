# routers/contact.py
from fastapi import APIRouter

router = APIRouter()

CONTACT_CHANNELS = [
    {"type": "email", "value": "support@bookhive.com"},
    {"type": "phone", "value": "+91 9876543210"},
]

CONTACT_INFO = {
    "email": "Krishjain9030@gmail.com",
    "phone": "+91 7052388485",
    "address": {
        "street": "123 Book Street",
        "city": "Ghaziabad",
        "state": "Uttar Pradesh",
        "country": "India",
        "pincode": "201001",
    },
    "business_hours": {
        "monday": "9:00 AM - 6:00 PM",
        "tuesday": "9:00 AM - 6:00 PM",
        "wednesday": "9:00 AM - 6:00 PM",
        "thursday": "9:00 AM - 6:00 PM",
        "friday": "9:00 AM - 6:00 PM",
        "saturday": "10:00 AM - 4:00 PM",
        "sunday": "Closed",
    },
}

SOCIAL_LINKS = [
    {"platform": "facebook", "link": "https://facebook.com/bookhive", "icon": "fab fa-facebook-f"},
    {"platform": "twitter", "link": "https://twitter.com/bookhive", "icon": "fab fa-twitter"},
    {"platform": "instagram", "link": "https://instagram.com/bookhive", "icon": "fab fa-instagram"},
    {"platform": "linkedin", "link": "https://linkedin.com/company/bookhive", "icon": "fab fa-linkedin-in"},
    {"platform": "youtube", "link": "https://youtube.com/bookhive", "icon": "fab fa-youtube"},
]

FAQ = [
    {
        "id": 1,
        "question": "How do I create an account on BookHive?",
        "answer": "Click 'Sign Up' on the homepage and fill in the registration form with your email and password.",
    },
    {
        "id": 2,
        "question": "How can I find books for my specific course?",
        "answer": "Use the search box or browse by subject and location to find what you need.",
    },
    {
        "id": 3,
        "question": "Are the books on BookHive free?",
        "answer": "Past papers and blogs are free. Books are sold or rented at the price set by their owner.",
    },
    {
        "id": 4,
        "question": "How do I contact customer support?",
        "answer": "Email support@bookhive.com or call +91 9876543210 during business hours.",
    },
    {
        "id": 5,
        "question": "Can I contribute my own study materials?",
        "answer": "Yes. Any signed-in user can upload past papers and write blog posts.",
    },
]

LOCATIONS = [
    {
        "id": 1,
        "name": "Main Office - Ghaziabad",
        "address": "123 Book Street, Ghaziabad, UP 201001, India",
        "phone": "+91 9876543210",
        "email": "ghaziabad@bookhive.com",
        "coordinates": {"latitude": 28.6692, "longitude": 77.4538},
        "hours": "Monday - Friday: 9:00 AM - 6:00 PM",
    },
    {
        "id": 2,
        "name": "Delhi Branch",
        "address": "456 Education Hub, New Delhi, DL 110001, India",
        "phone": "+91 9876543211",
        "email": "delhi@bookhive.com",
        "coordinates": {"latitude": 28.7041, "longitude": 77.1025},
        "hours": "Monday - Saturday: 10:00 AM - 7:00 PM",
    },
]


@router.get("")
def get_contact_channels():
    return CONTACT_CHANNELS


@router.get("/info")
def get_contact_info():
    return {"success": True, "data": CONTACT_INFO}


@router.get("/social")
def get_social_links():
    return {"success": True, "data": SOCIAL_LINKS}


@router.get("/faq")
def get_faq():
    return {"success": True, "data": FAQ}


@router.get("/locations")
def get_locations():
    return {"success": True, "data": LOCATIONS}
