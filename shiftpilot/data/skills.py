"""Built-in skill catalog used when resolving skill ids to display names"""

from pydantic import BaseModel


class Skill(BaseModel):
    id: str
    name: str
    category: str
    description: str | None = None


SKILLS: list[Skill] = [
    Skill(id="skill_001", name="Event Planning", category="administrative",
          description="Planning and organizing events, coordinating logistics"),
    Skill(id="skill_002", name="Data Entry", category="administrative",
          description="Accurate data input and database management"),
    Skill(id="skill_003", name="Customer Service", category="social",
          description="Interacting with clients and providing assistance"),
    Skill(id="skill_004", name="First Aid/CPR", category="healthcare",
          description="Emergency medical response and basic healthcare"),
    Skill(id="skill_005", name="Counseling", category="social",
          description="Providing emotional support and guidance"),
    Skill(id="skill_006", name="Construction", category="manual_labor",
          description="Building, repair, and maintenance work"),
    Skill(id="skill_007", name="Teaching/Tutoring", category="educational",
          description="Instructing and mentoring others"),
    Skill(id="skill_008", name="Landscaping", category="manual_labor",
          description="Gardening, tree work, and outdoor maintenance"),
    Skill(id="skill_009", name="Food Service", category="food_service",
          description="Food preparation, serving, and kitchen work"),
    Skill(id="skill_010", name="Transportation", category="logistics",
          description="Driving and delivery services"),
    Skill(id="skill_011", name="Photography", category="creative",
          description="Event photography and documentation"),
    Skill(id="skill_012", name="Translation", category="educational",
          description="Language interpretation and translation services"),
    Skill(id="skill_013", name="Social Media", category="technical",
          description="Managing social media accounts and content creation"),
    Skill(id="skill_014", name="Fundraising", category="administrative",
          description="Organizing fundraising activities and campaigns"),
    Skill(id="skill_015", name="Animal Care", category="specialized",
          description="Caring for animals in shelters or rescue situations"),
    Skill(id="skill_016", name="Computer Skills", category="technical",
          description="Basic computer operation and software use"),
    Skill(id="skill_017", name="Public Speaking", category="social",
          description="Presenting and speaking to groups"),
    Skill(id="skill_018", name="Environmental Cleanup", category="environmental",
          description="Cleaning parks, beaches, and natural areas"),
    Skill(id="skill_019", name="Elderly Care", category="healthcare",
          description="Assisting elderly individuals with daily activities"),
    Skill(id="skill_020", name="Youth Mentoring", category="educational",
          description="Mentoring and guiding young people"),
    Skill(id="skill_021", name="Marketing", category="creative",
          description="Promoting events and creating marketing materials"),
    Skill(id="skill_022", name="Legal Assistance", category="specialized",
          description="Providing basic legal guidance and support"),
    Skill(id="skill_023", name="Crisis Response", category="emergency",
          description="Responding to emergency situations and disasters"),
    Skill(id="skill_024", name="Childcare", category="social",
          description="Supervising and caring for children"),
    Skill(id="skill_025", name="Mechanical Repair", category="technical",
          description="Fixing and maintaining mechanical equipment"),
]

_SKILLS_BY_ID = {skill.id: skill for skill in SKILLS}
_SKILLS_BY_NAME = {skill.name.lower(): skill for skill in SKILLS}


def find_skill_by_id(skill_id: str) -> Skill | None:
    return _SKILLS_BY_ID.get(skill_id)


def find_skill_by_name(name: str) -> Skill | None:
    """Case-insensitive lookup by display name"""
    return _SKILLS_BY_NAME.get(name.strip().lower())


def skill_name_lookup(skill_id: str) -> str | None:
    """Resolve a skill id to its display name, None if unknown"""
    skill = find_skill_by_id(skill_id)
    return skill.name if skill else None
