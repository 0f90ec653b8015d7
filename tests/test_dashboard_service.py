from eduhire.schemas.schemas import UserResponse
from eduhire.services.dashboard_service import profile_completion


def _user(profile: dict, email: str = "ada@example.com") -> UserResponse:
    return UserResponse.model_validate({"id": "u1", "email": email, "profile": profile})


def test_empty_profile_counts_only_account_email():
    assert profile_completion(_user({})) == 10


def test_complete_profile_is_100():
    user = _user({
        "personal": {"firstName": "Ada", "lastName": "Lovelace", "phone": "1", "location": "London"},
        "education": [{"institution": "Home"}],
        "experience": [{"role": "Analyst"}],
        "projects": [{"title": "Notes"}],
        "internships": [{"company": "Babbage & Co"}],
        "skills": {"soft": ["Writing"]},
    })

    assert profile_completion(user) == 100


def test_any_skill_bucket_fills_the_skills_slot():
    without = profile_completion(_user({}))
    with_skill = profile_completion(_user({"skills": {"tools": ["Loom"]}}))

    assert with_skill - without == 10


def test_empty_strings_do_not_count():
    user = _user({"personal": {"firstName": "", "phone": ""}})

    assert profile_completion(user) == 10
