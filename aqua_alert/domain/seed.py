"""
Seed collections served by the portal views.

Hazards, forum posts, events and education resources are static. Alert
timestamps are laid out relative to the moment the context starts so the
active alerts still have time remaining while the service runs.
"""
from datetime import date, datetime, timedelta, timezone
from typing import List

from .models import (
    Category,
    CleanupEvent,
    EducationalResource,
    EmergencyAlert,
    ForumPost,
    HazardReport,
)


def _utc(value: str) -> datetime:
    return datetime.fromisoformat(value).replace(tzinfo=timezone.utc)


HAZARDS: List[HazardReport] = [
    HazardReport(
        id="1",
        type="contamination",
        severity="high",
        location=(19.0760, 72.8777),
        title="Chemical Contamination Detected",
        description="Unusual chemical odor and discoloration in water supply",
        reported_by="John Smith",
        reported_at=_utc("2024-01-15T10:30:00"),
        status="investigating",
    ),
    HazardReport(
        id="2",
        type="flooding",
        severity="critical",
        location=(28.6139, 77.2090),
        title="Flash Flood Warning",
        description="Rapid water level rise due to heavy rainfall",
        reported_by="Emergency Services",
        reported_at=_utc("2024-01-15T08:15:00"),
        status="active",
    ),
    HazardReport(
        id="3",
        type="temperature",
        severity="medium",
        location=(13.0827, 80.2707),
        title="Elevated Water Temperature",
        description="Water temperature 15°F above normal levels",
        reported_by="Marine Biologist Team",
        reported_at=_utc("2024-01-14T16:45:00"),
        status="active",
    ),
    HazardReport(
        id="4",
        type="chemical",
        severity="low",
        location=(22.5726, 88.3639),
        title="pH Level Anomaly",
        description="Slightly acidic pH levels detected in local reservoir",
        reported_by="Srinivas Rao",
        reported_at=_utc("2024-01-13T12:20:00"),
        status="resolved",
    ),
]


def build_alerts(now: datetime) -> List[EmergencyAlert]:
    """Alert feed anchored at `now`. The chemical spill alert is already past expiry."""
    return [
        EmergencyAlert(
            id="alert-001",
            type="tsunami",
            severity="warning",
            title="Tsunami Warning - Coastal Areas",
            description="A tsunami warning has been issued for coastal areas following a 7.2 magnitude earthquake in the Pacific Ocean.",
            location="East Coast Maritime Zone",
            coordinates=(40.7128, -74.0060),
            issued_at=now - timedelta(hours=1),
            expires_at=now + timedelta(hours=5),
            source="INCOIS - Indian National Centre for Ocean Information Services",
            instructions=[
                "Move immediately to higher ground or inland",
                "Stay away from beaches, harbors, and coastal areas",
                "Listen to local emergency broadcasts",
                "Do not return to coastal areas until all-clear is given",
            ],
            affected_areas=["Coastal District A", "Harbor Zone B", "Beach Communities C-F"],
            status="active",
        ),
        EmergencyAlert(
            id="alert-002",
            type="flood",
            severity="emergency",
            title="Flash Flood Emergency - Urban Areas",
            description="Extreme rainfall has caused rapid flooding in urban areas. Immediate evacuation required for low-lying zones.",
            location="Metropolitan Downtown",
            coordinates=(40.7589, -73.9851),
            issued_at=now - timedelta(hours=3, minutes=15),
            expires_at=now + timedelta(hours=14, minutes=30),
            source="National Weather Service",
            instructions=[
                "Evacuate low-lying areas immediately",
                "Do not drive through flooded roads",
                "Seek higher ground and shelter",
                "Call emergency services if trapped",
            ],
            affected_areas=["Downtown District", "Riverside Communities", "Industrial Zone"],
            status="active",
        ),
        EmergencyAlert(
            id="alert-003",
            type="storm",
            severity="watch",
            title="Severe Storm Watch - Regional",
            description="Conditions are favorable for severe thunderstorms with potential for damaging winds and heavy rainfall.",
            location="Regional Area",
            coordinates=(40.7282, -73.7949),
            issued_at=now - timedelta(hours=5, minutes=30),
            expires_at=now + timedelta(hours=6, minutes=30),
            source="Regional Weather Center",
            instructions=[
                "Monitor weather conditions closely",
                "Secure outdoor objects and equipment",
                "Avoid unnecessary travel",
                "Stay indoors during severe weather",
            ],
            affected_areas=["Northern Suburbs", "Agricultural Areas", "Mountain Regions"],
            status="active",
        ),
        EmergencyAlert(
            id="alert-004",
            type="chemical",
            severity="warning",
            title="Chemical Spill - Water Supply Risk",
            description="Industrial chemical spill detected near water treatment facility. Potential contamination risk.",
            location="Industrial Complex East",
            coordinates=(40.6892, -74.0445),
            issued_at=now - timedelta(hours=22, minutes=45),
            expires_at=now - timedelta(minutes=45),
            source="Environmental Protection Agency",
            instructions=[
                "Avoid using tap water until further notice",
                "Use bottled water for drinking and cooking",
                "Stay away from affected industrial area",
                "Report any unusual water odor or color",
            ],
            affected_areas=["East Industrial Zone", "Adjacent Residential Areas"],
            status="expired",
        ),
    ]


FORUM_POSTS: List[ForumPost] = [
    ForumPost(
        id="1",
        title="Water Quality Concerns in Downtown Area",
        content="Has anyone else noticed unusual taste in tap water near the downtown district? I've been monitoring this for the past week and would like to coordinate with others to report this properly.",
        author="Sarah Johnson",
        author_avatar="https://images.pexels.com/photos/774909/pexels-photo-774909.jpeg?auto=compress&cs=tinysrgb&w=150&h=150&dpr=1",
        created_at=_utc("2024-01-15T10:30:00"),
        replies=12,
        likes=8,
        category="water-quality",
        tags=["downtown", "taste", "monitoring"],
    ),
    ForumPost(
        id="2",
        title="Successful Beach Cleanup - Thank You All!",
        content="Amazing turnout for yesterday's beach cleanup! We collected over 200 pounds of debris and found several water quality issues that we've reported. Photos and results attached.",
        author="Mike Chen",
        author_avatar="https://images.pexels.com/photos/1222271/pexels-photo-1222271.jpeg?auto=compress&cs=tinysrgb&w=150&h=150&dpr=1",
        created_at=_utc("2024-01-14T16:45:00"),
        replies=25,
        likes=34,
        category="cleanup",
        tags=["beach", "success", "debris"],
    ),
    ForumPost(
        id="3",
        title="New IoT Sensor Installation - Riverside Park",
        content="Great news! A new water quality sensor has been installed at Riverside Park. You can now monitor real-time data from this location on the IoT dashboard.",
        author="Admin Team",
        author_avatar="https://images.pexels.com/photos/1181686/pexels-photo-1181686.jpeg?auto=compress&cs=tinysrgb&w=150&h=150&dpr=1",
        created_at=_utc("2024-01-13T09:15:00"),
        replies=7,
        likes=15,
        category="technology",
        tags=["iot", "sensor", "riverside"],
    ),
]

CLEANUP_EVENTS: List[CleanupEvent] = [
    CleanupEvent(
        id="1",
        title="Harbor District Water Quality Assessment",
        description="Join us for a comprehensive water quality assessment in the harbor district. We'll be collecting samples and documenting any issues found.",
        date=date(2024, 1, 20),
        time="09:00",
        location="Harbor District Marina",
        organizer="Environmental Action Group",
        participants=15,
        max_participants=25,
        status="upcoming",
    ),
    CleanupEvent(
        id="2",
        title="Community River Cleanup",
        description="Monthly river cleanup event. Bring gloves and water bottles - all other equipment provided. Great for families!",
        date=date(2024, 1, 22),
        time="08:00",
        location="Riverside Park Entrance",
        organizer="River Guardians",
        participants=32,
        max_participants=50,
        status="upcoming",
    ),
    CleanupEvent(
        id="3",
        title="Educational Workshop: Water Testing",
        description="Learn how to test water quality at home and understand the results. Perfect for new community members.",
        date=date(2024, 1, 25),
        time="18:00",
        location="Community Center",
        organizer="Aqua Alert Education Team",
        participants=8,
        max_participants=20,
        status="upcoming",
    ),
]

FORUM_CATEGORIES: List[Category] = [
    Category(value="all", label="All Categories"),
    Category(value="water-quality", label="Water Quality"),
    Category(value="cleanup", label="Cleanup Events"),
    Category(value="technology", label="Technology"),
    Category(value="education", label="Education"),
    Category(value="emergency", label="Emergency"),
]

EDUCATION_RESOURCES: List[EducationalResource] = [
    EducationalResource(
        id="1",
        title="Understanding Water Quality Parameters",
        description="Learn about pH, turbidity, dissolved oxygen, and other key indicators of water quality. This comprehensive guide covers what each parameter means and why it matters.",
        type="article",
        category="water-quality",
        author="Dr. Sarah Martinez",
        published_at=date(2024, 1, 10),
        thumbnail="https://images.pexels.com/photos/416528/pexels-photo-416528.jpeg?auto=compress&cs=tinysrgb&w=400&h=250&dpr=1",
        tags=["pH", "turbidity", "dissolved-oxygen", "basics"],
    ),
    EducationalResource(
        id="2",
        title="How to Test Water Quality at Home",
        description="Step-by-step video tutorial showing you how to test your water quality using simple home testing kits and interpret the results.",
        type="video",
        category="testing",
        duration="12 minutes",
        author="Water Safety Institute",
        published_at=date(2024, 1, 8),
        video_url="https://example.com/video",
        thumbnail="https://images.pexels.com/photos/1458671/pexels-photo-1458671.jpeg?auto=compress&cs=tinysrgb&w=400&h=250&dpr=1",
        tags=["testing", "home", "diy", "tutorial"],
    ),
    EducationalResource(
        id="3",
        title="Water Contamination Types and Sources",
        description="Comprehensive guide to different types of water contamination, their sources, health effects, and prevention methods.",
        type="guide",
        category="contamination",
        author="Environmental Protection Agency",
        published_at=date(2024, 1, 5),
        download_url="https://example.com/guide.pdf",
        thumbnail="https://images.pexels.com/photos/3735747/pexels-photo-3735747.jpeg?auto=compress&cs=tinysrgb&w=400&h=250&dpr=1",
        tags=["contamination", "sources", "health", "prevention"],
    ),
    EducationalResource(
        id="4",
        title="Emergency Water Safety Procedures",
        description="What to do during water emergencies: flooding, contamination alerts, and infrastructure failures. Essential knowledge for every community member.",
        type="article",
        category="emergency",
        author="Emergency Response Team",
        published_at=date(2024, 1, 3),
        thumbnail="https://images.pexels.com/photos/1108572/pexels-photo-1108572.jpeg?auto=compress&cs=tinysrgb&w=400&h=250&dpr=1",
        tags=["emergency", "flooding", "procedures", "safety"],
    ),
    EducationalResource(
        id="5",
        title="IoT Sensors: How They Monitor Water Quality",
        description="Learn how Internet of Things sensors work to continuously monitor water quality parameters and provide real-time data.",
        type="video",
        category="technology",
        duration="8 minutes",
        author="Tech for Good Foundation",
        published_at=date(2024, 1, 1),
        video_url="https://example.com/video2",
        thumbnail="https://images.pexels.com/photos/159298/gears-cogs-machine-machinery-159298.jpeg?auto=compress&cs=tinysrgb&w=400&h=250&dpr=1",
        tags=["iot", "sensors", "technology", "monitoring"],
    ),
    EducationalResource(
        id="6",
        title="Water Safety Infographic",
        description="Visual guide to water safety best practices, warning signs, and emergency contacts. Perfect for printing and sharing.",
        type="infographic",
        category="safety",
        author="Public Health Department",
        published_at=date(2023, 12, 28),
        download_url="https://example.com/infographic.pdf",
        thumbnail="https://images.pexels.com/photos/1181467/pexels-photo-1181467.jpeg?auto=compress&cs=tinysrgb&w=400&h=250&dpr=1",
        tags=["infographic", "safety", "visual", "reference"],
    ),
]

EDUCATION_CATEGORIES: List[Category] = [
    Category(value="all", label="All Resources"),
    Category(value="water-quality", label="Water Quality"),
    Category(value="testing", label="Testing Methods"),
    Category(value="contamination", label="Contamination"),
    Category(value="emergency", label="Emergency Procedures"),
    Category(value="technology", label="Technology"),
    Category(value="safety", label="Safety Guidelines"),
]

# Profile page data. name and email are replaced by the signed-in user, if any.
PROFILE_DEFAULTS = {
    "name": "John Doe",
    "email": "john.doe@example.com",
    "phone": "+1 (555) 123-4567",
    "location": "New York, NY",
    "bio": "Environmental enthusiast committed to water safety and community protection.",
    "joined_date": date(2023, 6, 15),
    "saved_locations": [
        {"id": "1", "name": "Home", "address": "123 Main St, New York, NY", "coordinates": [40.7128, -74.0060]},
        {"id": "2", "name": "Work", "address": "456 Business Ave, New York, NY", "coordinates": [40.7589, -73.9851]},
        {"id": "3", "name": "School", "address": "789 Education Blvd, New York, NY", "coordinates": [40.7282, -73.7949]},
    ],
    "notification_settings": {
        "emergency_alerts": True,
        "hazard_reports": True,
        "community_updates": False,
        "weekly_digest": True,
        "email_notifications": True,
        "sms_notifications": False,
    },
    "stats": {
        "reports_submitted": 12,
        "events_attended": 8,
        "community_rank": "Water Guardian",
        "points_earned": 2450,
    },
    "recent_activity": [
        {"id": "1", "type": "report", "title": "Reported water contamination", "location": "Downtown District", "date": "2024-01-15", "status": "resolved"},
        {"id": "2", "type": "event", "title": "Attended beach cleanup", "location": "Coastal Park", "date": "2024-01-12", "status": "completed"},
        {"id": "3", "type": "comment", "title": "Commented on forum discussion", "location": "Community Forum", "date": "2024-01-10", "status": "active"},
    ],
}
