"""Synthetic FYLA data for running without a backend.

MockDataGenerator takes a random.Random so fixtures can be reproduced:
two generators built with the same seed produce the same objects.
MockDelay simulates network latency on the mock path.
"""
import asyncio
import datetime as dt
import random
from typing import Callable, List, Optional

from fyla.config import MockSettings
from fyla.models.ai_booking import (
    DiscountType,
    PricingOptimization,
    ProviderAvailability,
    ServiceRecommendation,
    SpecialOffer,
    TimeSlotRecommendation,
)
from fyla.models.analytics import (
    AnalyticsData,
    AnalyticsPeriod,
    AppointmentHistoryEntry,
    AppointmentMetrics,
    AppointmentStatusData,
    ClientInsight,
    DailyEarning,
    DayCount,
    EarningsData,
    HourCount,
    MonthlyEarning,
    MostBookedService,
    PeakHours,
    RevenueData,
    ServiceAnalytics,
    WeeklyEarning,
)
from fyla.models.appointments import (
    Appointment,
    AppointmentListResponse,
    AppointmentServiceItem,
    AppointmentStatus,
    Service,
    TimeSlot,
    UserSummary,
)
from fyla.models.auth import User, UserRole
from fyla.models.business_hours import DEFAULT_BUSINESS_HOURS, BusinessHours
from fyla.models.chat import (
    ChatUser,
    Conversation,
    ConversationListResponse,
    Message,
    MessagesResponse,
)
from fyla.models.content import (
    Comment,
    FeedResponse,
    Media,
    Post,
    PostAuthor,
    Story,
    StoryGroup,
)
from fyla.models.providers import ProviderProfile, ServiceProviderTag
from fyla.models.social import UserFollow, UserSocialStats

FIRST_NAMES = ["Sarah", "Maria", "Alex", "Emily", "Jessica", "Olivia", "Sophia", "Emma", "Daniel", "James"]
LAST_NAMES = ["Johnson", "Garcia", "Thompson", "Davis", "Wilson", "Martinez", "Brown", "Lee", "Clark", "Lewis"]

SAMPLE_IMAGES = [
    "https://images.unsplash.com/photo-1560472354-b33ff0c44a43?w=300",
    "https://images.unsplash.com/photo-1522337360788-8b13dee7a37e?w=300",
    "https://images.unsplash.com/photo-1487412720507-e7ab37603c6f?w=300",
    "https://images.unsplash.com/photo-1615398349754-cee7d9d8dc4e?w=300",
    "https://images.unsplash.com/photo-1559599101-f09722fb4948?w=300",
    "https://images.unsplash.com/photo-1522338242992-e1a54906a8da?w=300",
]

CAPTIONS = [
    "Fresh balayage for the weekend",
    "Before and after: full color correction",
    "New nail art set, spring edition",
    "Classic fade with a sharp line-up",
    "Relaxing deep tissue session slots open this week",
    "Glow-up facial results",
]

COMMENTS = [
    "Love this!",
    "Absolutely stunning work",
    "How do I book this?",
    "Amazing transformation",
    "So talented!",
]

CHAT_LINES = [
    "Hi! Do you have availability this Saturday?",
    "Yes, I have a 10:00 slot open.",
    "Perfect, I'll book it now.",
    "See you then!",
    "Could we move it 30 minutes later?",
    "No problem, updated.",
]

TAGS = [
    ServiceProviderTag(id=1, name="Hair Stylist"),
    ServiceProviderTag(id=2, name="Nail Technician"),
    ServiceProviderTag(id=3, name="Barber"),
    ServiceProviderTag(id=4, name="Massage Therapist"),
    ServiceProviderTag(id=5, name="Esthetician"),
]

_PROVIDER_CREATED = dt.datetime(2024, 1, 1, tzinfo=dt.timezone.utc)

# (id, name, email, phone, bio, lat, lng, rating, reviews, distance, online, tag id, service)
_PROVIDERS = [
    (1, "Sarah Johnson", "sarah@example.com", "+1234567890",
     "Professional hair stylist with 8 years of experience. Specializing in color and cuts.",
     40.7128, -74.0060, 4.8, 127, 2.3, True, 1,
     ("Haircut & Style", "Professional haircut with styling", 75.0, 60)),
    (2, "Maria Garcia", "maria@example.com", "+1234567891",
     "Licensed nail technician offering manicures, pedicures, and nail art.",
     40.7589, -73.9851, 4.9, 203, 4.1, True, 2,
     ("Gel Manicure", "Long-lasting gel manicure", 45.0, 45)),
    (3, "Alex Thompson", "alex@example.com", "+1234567892",
     "Master barber specializing in traditional and modern cuts.",
     40.7505, -73.9934, 4.7, 89, 1.8, False, 3,
     ("Classic Haircut", "Traditional barber haircut", 35.0, 30)),
]

_CLIENT_INSIGHTS = [
    (1, "Sarah Johnson", "SJ", 8, 1240.0, dt.date(2025, 1, 5), 4.9,
     [(dt.date(2025, 1, 5), "Hair Cut & Style", 150.0), (dt.date(2024, 12, 15), "Hair Color", 240.0)]),
    (2, "Emily Davis", "ED", 6, 890.0, dt.date(2025, 1, 3), 4.8,
     [(dt.date(2025, 1, 3), "Facial Treatment", 120.0), (dt.date(2024, 12, 20), "Manicure", 80.0)]),
    (3, "Jessica Wilson", "JW", 12, 1890.0, dt.date(2025, 1, 1), 5.0,
     [(dt.date(2025, 1, 1), "Massage", 120.0), (dt.date(2024, 12, 18), "Hair Cut & Style", 150.0)]),
]

DAY_NAMES = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]

# (email, password, id, role, name, phone)
DEMO_ACCOUNTS = [
    ("client@example.com", "password", 1, UserRole.CLIENT, "John Doe", "+1234567890"),
    ("provider@example.com", "password", 2, UserRole.PROVIDER, "Jane Smith", "+0987654321"),
]

# (name, description, price, minutes)
_SERVICE_CATALOG = [
    ("Women's Haircut & Style", "Professional haircut and styling for women. Includes wash, cut, and blow dry.",
     75.0, 90),
    ("Hair Color & Highlights", "Full color service or highlights. Includes consultation, application, and styling.",
     150.0, 180),
]

RECOMMENDATION_REASONS = [
    "Based on your previous bookings and 5-star reviews",
    "Popular choice in your area",
    "Matches your schedule preferences",
    "Highly rated by clients with similar bookings",
]

# (day offset, hour, minute, availability, price multiplier, reason)
_SLOT_PATTERNS = [
    (0, 10, 0, ProviderAvailability.HIGH, 1.0, "Optimal time based on your schedule and provider availability"),
    (0, 14, 30, ProviderAvailability.MEDIUM, 1.1, "Good afternoon slot with moderate demand"),
    (1, 9, 0, ProviderAvailability.HIGH, 0.9, "Early morning slot with potential savings"),
]

BOOKING_TIPS = [
    "Book 24 hours in advance for the best prices",
    "Morning slots typically have better availability",
    "Consider combo packages for multiple services",
]

OFF_PEAK_DISCOUNT = 0.10


def _utc_now() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


class MockDataGenerator:
    """Builds DTOs with the same shapes the REST API returns."""

    def __init__(self, rng: Optional[random.Random] = None, clock: Callable[[], dt.datetime] = _utc_now):
        """
        Args:
            rng: Random source; pass random.Random(seed) for reproducible output
            clock: Current time, used as the anchor for generated timestamps
        """
        self.rng = rng or random.Random()
        self._clock = clock

    def now(self) -> dt.datetime:
        return self._clock()

    def _full_name(self) -> str:
        return f"{self.rng.choice(FIRST_NAMES)} {self.rng.choice(LAST_NAMES)}"

    def _days_ago(self, max_days: float) -> dt.datetime:
        return self._clock() - dt.timedelta(seconds=self.rng.uniform(0, max_days * 86400))

    # content

    def likes_count(self) -> int:
        return self.rng.randint(10, 250)

    def post(self, post_id: Optional[str] = None, provider_id: Optional[int] = None) -> Post:
        provider_id = provider_id or self.rng.randint(1, 20)
        post_id = post_id or f"post_{self.rng.randint(1, 10_000)}"
        image = self.rng.choice(SAMPLE_IMAGES)
        created = self._days_ago(30)
        return Post(
            id=post_id,
            content=self.rng.choice(CAPTIONS),
            image_url=image,
            created_at=created,
            updated_at=created,
            provider_id=provider_id,
            provider_name=self._full_name(),
            provider_profile_image_url=f"https://i.pravatar.cc/150?u={provider_id}",
            likes_count=self.likes_count(),
            comments_count=self.rng.randint(0, 40),
            is_liked_by_current_user=False,
            media=[Media(id=f"media_{post_id}", url=image)],
        )

    def comment(self, post_id: Optional[str], comment_id: Optional[str] = None, text: Optional[str] = None) -> Comment:
        user_id = self.rng.randint(1, 50)
        return Comment(
            id=comment_id or f"comment_{self.rng.randint(1, 100_000)}",
            post_id=post_id,
            user_id=user_id,
            user_name=self._full_name(),
            user_profile_image_url=f"https://i.pravatar.cc/150?u={user_id}",
            comment=text or self.rng.choice(COMMENTS),
            created_at=self._days_ago(7),
        )

    def comments(self, post_id: str, page: int = 1, page_size: int = 20) -> List[Comment]:
        count = self.rng.randint(0, page_size) if page == 1 else self.rng.randint(0, page_size // 2)
        offset = (page - 1) * page_size
        return [self.comment(post_id, f"comment_{post_id}_{offset + i + 1}") for i in range(count)]

    def story_groups(self, count: int = 4) -> List[StoryGroup]:
        groups = []
        for index in range(count):
            user_id = index + 1
            author = PostAuthor(
                id=user_id,
                full_name=self._full_name(),
                profile_picture_url=f"https://i.pravatar.cc/150?u={user_id}",
            )
            stories = []
            for story_index in range(self.rng.randint(1, 3)):
                created = self._days_ago(1)
                stories.append(Story(
                    id=f"story_{user_id}_{story_index + 1}",
                    user_id=user_id,
                    media=Media(id=f"story_media_{user_id}_{story_index + 1}", url=self.rng.choice(SAMPLE_IMAGES)),
                    created_at=created,
                    expires_at=created + dt.timedelta(hours=24),
                    is_viewed=self.rng.random() < 0.5,
                    views_count=self.rng.randint(0, 300),
                ))
            groups.append(StoryGroup(
                user=author,
                stories=stories,
                has_unviewed_stories=any(not s.is_viewed for s in stories),
                latest_story_time=max(s.created_at for s in stories),
            ))
        return groups

    def feed(self, page: int = 1, page_size: int = 10, provider_id: Optional[int] = None,
             total_count: int = 50) -> FeedResponse:
        start = (page - 1) * page_size
        count = max(0, min(page_size, total_count - start))
        posts = [self.post(f"post_{start + i + 1}", provider_id) for i in range(count)]
        return FeedResponse(
            posts=posts,
            stories=self.story_groups() if page == 1 and provider_id is None else [],
            total_count=total_count,
            page=page,
            page_size=page_size,
            has_next_page=start + count < total_count,
        )

    # providers

    def tags(self) -> List[ServiceProviderTag]:
        return [tag.model_copy() for tag in TAGS]

    def providers(self) -> List[ProviderProfile]:
        tags = {tag.id: tag for tag in TAGS}
        providers = []
        for (pid, name, email, phone, bio, lat, lng, rating, reviews, distance, online,
             tag_id, (service_name, service_desc, price, minutes)) in _PROVIDERS:
            posts = [self.post(f"provider_{pid}_post_{i + 1}", pid) for i in range(3)]
            for post in posts:
                post.provider_name = name
            providers.append(ProviderProfile(
                id=pid,
                full_name=name,
                email=email,
                phone_number=phone,
                bio=bio,
                location_lat=lat,
                location_lng=lng,
                average_rating=rating,
                total_reviews=reviews,
                distance=distance,
                is_online=online,
                tags=[tags[tag_id]],
                services=[Service(
                    id=pid,
                    provider_id=pid,
                    name=service_name,
                    description=service_desc,
                    price=price,
                    estimated_duration_minutes=minutes,
                    created_at=_PROVIDER_CREATED,
                )],
                posts=posts,
                created_at=_PROVIDER_CREATED,
            ))
        return providers

    # appointments

    def time_slots(self, date: dt.date) -> List[TimeSlot]:
        """Hourly slots 09:00-17:00 with the 12:00 lunch hour skipped."""
        slots = []
        for hour in range(9, 17):
            if hour == 12:
                continue
            slots.append(TimeSlot(
                start_time=f"{hour:02d}:00",
                end_time=f"{hour + 1:02d}:00",
                is_available=self.rng.random() > 0.3,
            ))
        return slots

    def appointment(
        self,
        appointment_id: Optional[int] = None,
        status: Optional[AppointmentStatus] = None,
        provider_id: Optional[int] = None,
        start: Optional[dt.datetime] = None,
        service_ids: Optional[List[int]] = None,
        notes: Optional[str] = None,
    ) -> Appointment:
        appointment_id = appointment_id or self.rng.randint(1, 10_000)
        provider_id = provider_id or self.rng.randint(1, 3)
        if start is None:
            start = (self._clock() + dt.timedelta(days=self.rng.randint(-14, 14))).replace(
                hour=self.rng.choice([9, 10, 11, 13, 14, 15, 16]), minute=0, second=0, microsecond=0,
            )
        items = []
        total = 0.0
        for service_id in service_ids or [self.rng.randint(1, 3)]:
            price = float(self.rng.choice([35, 45, 60, 75, 90, 120]))
            total += price
            items.append(AppointmentServiceItem(
                appointment_id=appointment_id,
                service_id=service_id,
                price_at_booking=price,
                service=Service(id=service_id, provider_id=provider_id, name=f"Service {service_id}", price=price),
            ))
        client_id = self.rng.randint(10, 50)
        now = self._clock()
        return Appointment(
            id=appointment_id,
            client_id=client_id,
            provider_id=provider_id,
            scheduled_start_time=start,
            scheduled_end_time=start + dt.timedelta(minutes=60 * len(items)),
            status=status or self.rng.choice(list(AppointmentStatus)),
            total_price=total,
            created_at=now,
            updated_at=now,
            client=UserSummary(id=client_id, full_name=self._full_name(), role="Client"),
            provider=UserSummary(id=provider_id, full_name=self._full_name(), role="ServiceProvider"),
            services=items,
            notes=notes,
        )

    def appointments(self, page: int = 1, limit: int = 20,
                     status: Optional[AppointmentStatus] = None, total: int = 12) -> AppointmentListResponse:
        start = (page - 1) * limit
        count = max(0, min(limit, total - start))
        items = [self.appointment(start + i + 1, status) for i in range(count)]
        return AppointmentListResponse(appointments=items, total=total, has_more=start + count < total)

    # analytics

    def analytics_data(self, period: AnalyticsPeriod = AnalyticsPeriod.MONTH) -> AnalyticsData:
        buckets = {AnalyticsPeriod.WEEK: 7, AnalyticsPeriod.MONTH: 30,
                   AnalyticsPeriod.QUARTER: 13, AnalyticsPeriod.YEAR: 12}[period]
        today = self._clock().date()
        revenue = []
        for i in range(buckets):
            revenue.append(RevenueData(
                period=(today - dt.timedelta(days=buckets - 1 - i)).isoformat(),
                revenue=round(self.rng.uniform(100, 600), 2),
                appointments=self.rng.randint(1, 8),
            ))
        total_revenue = round(sum(r.revenue for r in revenue), 2)
        total_appointments = sum(r.appointments for r in revenue)
        counts = {status: self.rng.randint(1, 30) for status in AppointmentStatus}
        count_total = sum(counts.values())
        by_status = [
            AppointmentStatusData(status=s, count=c, percentage=round(100 * c / count_total, 1))
            for s, c in counts.items()
        ]
        top_services = [
            ServiceAnalytics(
                service_id=pid,
                service_name=service[0],
                booking_count=self.rng.randint(5, 40),
                total_revenue=round(self.rng.uniform(500, 3000), 2),
                average_rating=round(self.rng.uniform(4.0, 5.0), 1),
            )
            for pid, *_, service in _PROVIDERS
        ]
        top_services.sort(key=lambda s: s.booking_count, reverse=True)
        best = top_services[0]
        target = 10_000.0
        return AnalyticsData(
            total_revenue=total_revenue,
            total_appointments=total_appointments,
            average_rating=round(self.rng.uniform(4.3, 5.0), 1),
            completion_rate=round(100 * counts[AppointmentStatus.COMPLETED] / count_total, 1),
            no_show_rate=round(100 * counts[AppointmentStatus.NO_SHOW] / count_total, 1),
            new_clients_count=self.rng.randint(2, 20),
            returning_clients_count=self.rng.randint(5, 40),
            most_booked_service=MostBookedService(
                id=best.service_id, name=best.service_name, booking_count=best.booking_count,
            ),
            revenue_by_period=revenue,
            appointments_by_status=by_status,
            top_services=top_services,
            revenue_growth=round(self.rng.uniform(-10, 25), 1),
            client_retention_rate=round(self.rng.uniform(50, 90), 1),
            average_booking_value=round(total_revenue / total_appointments, 2) if total_appointments else 0.0,
            peak_business_hours=PeakHours(start="10:00", end="14:00"),
            appointments_by_time=[HourCount(hour=h, count=self.rng.randint(0, 12)) for h in range(9, 18)],
            appointments_by_day=[DayCount(day=d, count=self.rng.randint(0, 20)) for d in DAY_NAMES],
            monthly_recurring_revenue=round(self.rng.uniform(2000, 6000), 2),
            pending_payouts=2340.50,
            available_for_payout=1890.25,
            monthly_target=target,
            target_progress=round(min(100.0, 100 * total_revenue / target), 1),
        )

    def earnings(self, period: AnalyticsPeriod = AnalyticsPeriod.MONTH) -> EarningsData:
        today = self._clock().date()
        return EarningsData(
            total_earnings=12450.75,
            pending_payouts=2340.50,
            available_for_payout=1890.25,
            last_payout_date=today - dt.timedelta(days=14),
            next_payout_date=today + dt.timedelta(days=1),
            daily_earnings=[
                DailyEarning(date=today - dt.timedelta(days=29 - i), amount=round(self.rng.uniform(100, 600), 2))
                for i in range(30)
            ],
            weekly_earnings=[
                WeeklyEarning(week=f"Week {i + 1}", amount=round(self.rng.uniform(500, 2500), 2))
                for i in range(12)
            ],
            monthly_earnings=[
                MonthlyEarning(month=dt.date(2024, i + 1, 1).strftime("%B"), amount=round(self.rng.uniform(2000, 7000), 2))
                for i in range(12)
            ],
            platform_fee=342.50,
            processing_fee=156.75,
            net_earnings=11951.50,
            total_taxable_income=11951.50,
            estimated_taxes=2988.38,
        )

    def client_insights(self, limit: int = 10) -> List[ClientInsight]:
        insights = []
        for client_id, name, initials, visits, spent, last, rating, history in _CLIENT_INSIGHTS[:limit]:
            insights.append(ClientInsight(
                client_id=client_id,
                client_name=name,
                profile_picture_url=f"https://via.placeholder.com/50x50?text={initials}",
                total_appointments=visits,
                total_spent=spent,
                last_appointment=last,
                average_rating=rating,
                appointment_history=[
                    AppointmentHistoryEntry(date=d, service_name=s, amount=a, status="completed")
                    for d, s, a in history
                ],
            ))
        return insights

    def appointment_metrics(self) -> AppointmentMetrics:
        return AppointmentMetrics(
            total_upcoming=23,
            total_today=6,
            total_this_week=18,
            total_this_month=87,
            confirmed=25,
            pending=12,
            completed=45,
            cancelled=4,
            no_show=1,
            average_booking_lead_time=5.2,
            cancellation_rate=4.6,
            reschedule_rate=8.3,
            upcoming_revenue=3290.0,
            lost_revenue=580.0,
        )

    # business hours

    def business_hours(self, provider_id: int = 1) -> List[BusinessHours]:
        now = self._clock()
        return [
            BusinessHours(
                id=provider_id * 10 + entry.day_of_week,
                provider_id=provider_id,
                day_of_week=entry.day_of_week,
                open_time=entry.open_time,
                close_time=entry.close_time,
                is_open=entry.is_open,
                created_at=now,
                updated_at=now,
            )
            for entry in DEFAULT_BUSINESS_HOURS
        ]

    # chat

    def chat_user(self, user_id: int, role: str = "Client") -> ChatUser:
        return ChatUser(
            id=user_id,
            full_name=self._full_name(),
            email=f"user{user_id}@example.com",
            profile_picture_url=f"https://i.pravatar.cc/150?u={user_id}",
            role=role,
            is_online=self.rng.random() < 0.4,
        )

    def message(self, conversation_id: int, message_id: int, sender_id: int, receiver_id: int,
                content: Optional[str] = None, sent_at: Optional[dt.datetime] = None) -> Message:
        return Message(
            id=message_id,
            conversation_id=conversation_id,
            sender_id=sender_id,
            receiver_id=receiver_id,
            content=content or self.rng.choice(CHAT_LINES),
            is_read=self.rng.random() < 0.7,
            sent_at=sent_at or self._days_ago(2),
        )

    def conversation(self, conversation_id: int, client_id: int = 1, provider_id: Optional[int] = None) -> Conversation:
        provider_id = provider_id or 100 + conversation_id
        created = self._days_ago(30)
        last = self.message(conversation_id, conversation_id * 100, provider_id, client_id)
        return Conversation(
            id=conversation_id,
            client_id=client_id,
            provider_id=provider_id,
            last_message=last,
            unread_count=self.rng.randint(0, 3),
            created_at=created,
            updated_at=last.sent_at,
            client=self.chat_user(client_id),
            provider=self.chat_user(provider_id, role="ServiceProvider"),
        )

    def conversations(self, page: int = 1, limit: int = 20, total: int = 3) -> ConversationListResponse:
        start = (page - 1) * limit
        count = max(0, min(limit, total - start))
        items = [self.conversation(start + i + 1) for i in range(count)]
        return ConversationListResponse(conversations=items, total=total, has_more=start + count < total)

    def messages(self, conversation_id: int, page: int = 1, limit: int = 50) -> MessagesResponse:
        """Messages alternate between two participants, newest first."""
        count = min(limit, self.rng.randint(3, 8)) if page == 1 else 0
        now = self._clock()
        items = []
        for i in range(count):
            sender, receiver = (1, 2) if i % 2 == 0 else (2, 1)
            items.append(self.message(
                conversation_id,
                conversation_id * 1000 + i + 1,
                sender,
                receiver,
                content=CHAT_LINES[i % len(CHAT_LINES)],
                sent_at=now - dt.timedelta(minutes=15 * (count - i)),
            ))
        items.reverse()
        return MessagesResponse(messages=items, total=count, has_more=False)

    # social

    def user_follow(self, user_id: int, is_following: bool = False) -> UserFollow:
        name = self._full_name()
        is_provider = self.rng.random() < 0.5
        return UserFollow(
            id=user_id,
            full_name=name,
            email=f"{name.split()[0].lower()}{user_id}@example.com",
            profile_picture_url=f"https://i.pravatar.cc/150?u={user_id}",
            is_service_provider=is_provider,
            is_following=is_following,
            followers_count=self.rng.randint(0, 2000),
            following_count=self.rng.randint(0, 500),
            tags=[self.rng.choice(TAGS).name] if is_provider else [],
        )

    def user_follows(self, page: int = 1, page_size: int = 20, is_following: bool = False,
                     total: int = 12, id_offset: int = 200) -> List[UserFollow]:
        start = (page - 1) * page_size
        count = max(0, min(page_size, total - start))
        return [self.user_follow(id_offset + start + i + 1, is_following) for i in range(count)]

    def social_stats(self, user_id: int) -> UserSocialStats:
        return UserSocialStats(
            user_id=user_id,
            followers_count=self.rng.randint(0, 2000),
            following_count=self.rng.randint(0, 500),
            posts_count=self.rng.randint(0, 120),
            is_private=False,
        )

    # auth

    def user(self, user_id: int, role: UserRole, full_name: str, email: str, phone_number: str = "") -> User:
        now = self._clock()
        return User(
            id=user_id,
            role=role,
            full_name=full_name,
            email=email,
            phone_number=phone_number,
            profile_picture_url=f"https://i.pravatar.cc/150?u={user_id}",
            bio=f"Demo {role.value} account",
            created_at=now,
            updated_at=now,
        )

    # service management

    def provider_services(self, provider_id: int) -> List[Service]:
        return [
            Service(
                id=provider_id * 100 + i + 1,
                provider_id=provider_id,
                name=name,
                description=description,
                price=price,
                estimated_duration_minutes=minutes,
                created_at=_PROVIDER_CREATED,
            )
            for i, (name, description, price, minutes) in enumerate(_SERVICE_CATALOG)
        ]

    # booking recommendations

    def _offer(self, offer_id: str, title: str, description: str, percent: float,
               conditions: Optional[str] = None) -> SpecialOffer:
        return SpecialOffer(
            id=offer_id,
            title=title,
            description=description,
            discount_type=DiscountType.PERCENTAGE,
            discount_value=percent,
            valid_until=self._clock() + dt.timedelta(days=30),
            conditions=conditions,
        )

    def service_recommendations(self) -> List[ServiceRecommendation]:
        """One recommendation per mock provider, highest confidence first."""
        tomorrow = (self._clock() + dt.timedelta(days=1)).replace(minute=0, second=0, microsecond=0)
        recommendations = []
        for (pid, name, _email, _phone, _bio, _lat, _lng, rating, reviews, distance, _online,
             _tag, (service_name, _description, price, minutes)) in _PROVIDERS:
            hours = sorted(self.rng.sample([9, 10, 11, 13, 14, 15, 16], 2))
            recommendations.append(ServiceRecommendation(
                service_id=pid,
                service_name=service_name,
                provider_id=pid,
                provider_name=name,
                provider_image=f"https://i.pravatar.cc/150?u={pid}",
                confidence=round(self.rng.uniform(0.7, 0.98), 2),
                reason=self.rng.choice(RECOMMENDATION_REASONS),
                estimated_price=price,
                estimated_duration=minutes,
                available_slots=[tomorrow.replace(hour=hour) for hour in hours],
                rating=rating,
                review_count=reviews,
                distance=distance,
            ))
        recommendations[0].special_offers = [
            self._offer("offer1", "15% Off First Visit", "Special discount for new clients", 15),
        ]
        recommendations.sort(key=lambda r: r.confidence, reverse=True)
        return recommendations

    def time_slot_recommendations(self, preferred_date: Optional[dt.date] = None,
                                  estimated_duration: int = 60) -> List[TimeSlotRecommendation]:
        """Suggested start times on preferred_date (default: tomorrow) and the day after."""
        day = preferred_date or (self._clock() + dt.timedelta(days=1)).date()
        slots = []
        for offset, hour, minute, availability, multiplier, reason in _SLOT_PATTERNS:
            slots.append(TimeSlotRecommendation(
                start_time=dt.datetime.combine(day + dt.timedelta(days=offset), dt.time(hour, minute),
                                               tzinfo=dt.timezone.utc),
                confidence=round(self.rng.uniform(0.75, 0.95), 2),
                reason=reason,
                provider_availability=availability,
                price_multiplier=multiplier,
                estimated_duration=estimated_duration,
            ))
        return slots

    def personalized_offers(self) -> List[SpecialOffer]:
        return [
            self._offer("combo1", "Hair + Makeup Combo", "Save 20% when you book both services together", 20,
                        conditions="Valid for same-day bookings only"),
        ]

    def booking_tips(self) -> List[str]:
        return list(BOOKING_TIPS)

    def service_price(self, provider_id: int, default: float = 85.0) -> float:
        for provider in _PROVIDERS:
            if provider[0] == provider_id:
                return provider[-1][2]
        return default

    def pricing_optimization(self, provider_id: int, requested: dt.datetime) -> PricingOptimization:
        """Bookings before 11:00 or from 17:00 get the off-peak discount."""
        price = self.service_price(provider_id)
        if requested.hour < 11 or requested.hour >= 17:
            optimized = round(price * (1 - OFF_PEAK_DISCOUNT), 2)
            return PricingOptimization(
                original_price=price,
                optimized_price=optimized,
                savings_amount=round(price - optimized, 2),
                savings_percentage=OFF_PEAK_DISCOUNT * 100,
                reason="Off-peak timing discount available",
            )
        return PricingOptimization(
            original_price=price,
            optimized_price=price,
            reason="Peak time, standard price applies",
        )


class MockDelay:
    """Simulated latency awaited before every mock response."""

    def __init__(self, min_ms: int = 1000, max_ms: Optional[int] = None, enabled: bool = True,
                 rng: Optional[random.Random] = None):
        self.min_ms = min_ms
        self.max_ms = max_ms if max_ms is not None else min_ms
        if self.max_ms < self.min_ms:
            raise ValueError("max_ms must be greater than or equal to min_ms")
        self.enabled = enabled
        self.rng = rng or random.Random()

    @classmethod
    def from_settings(cls, settings: MockSettings, rng: Optional[random.Random] = None) -> "MockDelay":
        return cls(settings.min_delay_ms, settings.max_delay_ms, settings.delays_enabled, rng)

    def next_delay_ms(self) -> float:
        if not self.enabled:
            return 0.0
        if self.max_ms == self.min_ms:
            return float(self.min_ms)
        return self.rng.uniform(self.min_ms, self.max_ms)

    async def wait(self) -> None:
        delay_ms = self.next_delay_ms()
        if delay_ms > 0:
            await asyncio.sleep(delay_ms / 1000)
