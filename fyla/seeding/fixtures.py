"""Seed data for development databases."""

CLIENTS = [
    {
        "full_name": "Emma Johnson",
        "email": "emma.johnson@email.com",
        "phone_number": "+1-555-0101",
        "bio": "Love trying new beauty treatments and wellness services.",
        "location_lat": 40.7128,
        "location_lng": -74.006,
    },
    {
        "full_name": "Michael Chen",
        "email": "michael.chen@email.com",
        "phone_number": "+1-555-0102",
        "bio": "Fitness enthusiast looking for massage therapy and recovery services.",
        "location_lat": 40.758,
        "location_lng": -73.9855,
    },
    {
        "full_name": "Sarah Martinez",
        "email": "sarah.martinez@email.com",
        "phone_number": "+1-555-0103",
        "bio": "Working mom who needs convenient beauty and wellness services.",
        "location_lat": 40.7505,
        "location_lng": -73.9934,
    },
    {
        "full_name": "David Thompson",
        "email": "david.thompson@email.com",
        "phone_number": "+1-555-0104",
        "bio": "Business professional seeking grooming and wellness services.",
        "location_lat": 40.7614,
        "location_lng": -73.9776,
    },
    {
        "full_name": "Jessica Lee",
        "email": "jessica.lee@email.com",
        "phone_number": "+1-555-0105",
        "bio": "College student interested in affordable beauty treatments.",
        "location_lat": 40.7282,
        "location_lng": -73.9942,
    },
    {
        "full_name": "Robert Wilson",
        "email": "robert.wilson@email.com",
        "phone_number": "+1-555-0106",
        "bio": "Retired gentleman looking for relaxation and wellness services.",
        "location_lat": 40.7831,
        "location_lng": -73.9712,
    },
    {
        "full_name": "Amanda Rodriguez",
        "email": "amanda.rodriguez@email.com",
        "phone_number": "+1-555-0107",
        "bio": "Healthcare worker who values self-care and wellness.",
        "location_lat": 40.7363,
        "location_lng": -74.0056,
    },
    {
        "full_name": "James Park",
        "email": "james.park@email.com",
        "phone_number": "+1-555-0108",
        "bio": "Tech professional seeking stress relief and grooming services.",
        "location_lat": 40.7589,
        "location_lng": -73.9851,
    },
    {
        "full_name": "Lisa Anderson",
        "email": "lisa.anderson@email.com",
        "phone_number": "+1-555-0109",
        "bio": "Busy executive who needs efficient beauty and wellness solutions.",
        "location_lat": 40.7549,
        "location_lng": -73.984,
    },
    {
        "full_name": "Kevin Taylor",
        "email": "kevin.taylor@email.com",
        "phone_number": "+1-555-0110",
        "bio": "Athlete looking for recovery and performance enhancement services.",
        "location_lat": 40.7282,
        "location_lng": -73.9942,
    },
]

# "category" selects the SERVICE_TEMPLATES entry used for the provider's services
PROVIDERS = [
    {
        "full_name": "Sophia Grace",
        "email": "sophia.grace@fylapro.com",
        "phone_number": "+1-555-0201",
        "bio": "Licensed esthetician specializing in facials, chemical peels, and anti-aging treatments. 8+ years experience.",
        "location_lat": 40.7128,
        "location_lng": -74.006,
        "category": "Facials",
    },
    {
        "full_name": "Marcus Williams",
        "email": "marcus.williams@fylapro.com",
        "phone_number": "+1-555-0202",
        "bio": "Professional massage therapist offering deep tissue, Swedish, and sports massage. Certified in multiple modalities.",
        "location_lat": 40.758,
        "location_lng": -73.9855,
        "category": "Massage",
    },
    {
        "full_name": "Isabella Romano",
        "email": "isabella.romano@fylapro.com",
        "phone_number": "+1-555-0203",
        "bio": "Master stylist and colorist with expertise in cuts, color, and styling. Trained in latest trends and techniques.",
        "location_lat": 40.7505,
        "location_lng": -73.9934,
        "category": "Hair",
    },
    {
        "full_name": "Alexander Smith",
        "email": "alexander.smith@fylapro.com",
        "phone_number": "+1-555-0204",
        "bio": "Certified personal trainer and wellness coach. Specializes in strength training, weight loss, and lifestyle coaching.",
        "location_lat": 40.7614,
        "location_lng": -73.9776,
        "category": "Fitness",
    },
    {
        "full_name": "Maya Patel",
        "email": "maya.patel@fylapro.com",
        "phone_number": "+1-555-0205",
        "bio": "Certified nail technician offering manicures, pedicures, and nail art. Specializes in gel and acrylic applications.",
        "location_lat": 40.7282,
        "location_lng": -73.9942,
        "category": "Nails",
    },
    {
        "full_name": "Thomas Johnson",
        "email": "thomas.johnson@fylapro.com",
        "phone_number": "+1-555-0206",
        "bio": "Professional barber with classic and modern cutting techniques. Specializes in fades, beard trims, and grooming.",
        "location_lat": 40.7831,
        "location_lng": -73.9712,
        "category": "Barber",
    },
    {
        "full_name": "Chloe Davis",
        "email": "chloe.davis@fylapro.com",
        "phone_number": "+1-555-0207",
        "bio": "Makeup artist specializing in bridal, special events, and editorial makeup. Trained in various techniques and styles.",
        "location_lat": 40.7363,
        "location_lng": -74.0056,
        "category": "Makeup",
    },
    {
        "full_name": "Daniel Kim",
        "email": "daniel.kim@fylapro.com",
        "phone_number": "+1-555-0208",
        "bio": "Licensed acupuncturist and wellness practitioner. Specializes in pain management, stress relief, and holistic healing.",
        "location_lat": 40.7589,
        "location_lng": -73.9851,
        "category": "Acupuncture",
    },
    {
        "full_name": "Rachel Green",
        "email": "rachel.green@fylapro.com",
        "phone_number": "+1-555-0209",
        "bio": "Certified yoga instructor and meditation coach. Offers various yoga styles and mindfulness practices.",
        "location_lat": 40.7549,
        "location_lng": -73.984,
        "category": "Yoga",
    },
    {
        "full_name": "Antonio Lopez",
        "email": "antonio.lopez@fylapro.com",
        "phone_number": "+1-555-0210",
        "bio": "Professional physical therapist specializing in injury recovery, mobility, and rehabilitation services.",
        "location_lat": 40.7282,
        "location_lng": -73.9942,
        "category": "Physical Therapy",
    },
]

# (name, price, duration in minutes)
SERVICE_TEMPLATES = {
    "Facials": [
        ("Basic Facial", 75, 60),
        ("Deep Cleansing Facial", 95, 75),
        ("Anti-Aging Facial", 120, 90),
    ],
    "Massage": [
        ("Swedish Massage", 90, 60),
        ("Deep Tissue Massage", 110, 60),
        ("Sports Massage", 120, 75),
    ],
    "Hair": [
        ("Haircut & Style", 65, 45),
        ("Color & Cut", 150, 120),
        ("Highlights", 200, 150),
    ],
    "Fitness": [
        ("Personal Training Session", 80, 60),
        ("Fitness Assessment", 60, 45),
        ("Nutrition Consultation", 100, 60),
    ],
    "Nails": [
        ("Manicure", 35, 30),
        ("Pedicure", 45, 45),
        ("Gel Manicure", 55, 45),
    ],
    "Barber": [
        ("Haircut", 30, 30),
        ("Beard Trim", 25, 20),
        ("Full Service", 50, 45),
    ],
    "Makeup": [
        ("Event Makeup", 85, 60),
        ("Bridal Makeup", 150, 90),
        ("Makeup Lesson", 100, 75),
    ],
    "Acupuncture": [
        ("Initial Consultation", 120, 75),
        ("Follow-up Treatment", 90, 60),
        ("Pain Management", 110, 60),
    ],
    "Yoga": [
        ("Private Yoga Session", 85, 60),
        ("Meditation Session", 60, 45),
        ("Wellness Consultation", 75, 60),
    ],
    "Physical Therapy": [
        ("Initial Assessment", 150, 90),
        ("Physical Therapy Session", 120, 60),
        ("Rehabilitation Program", 200, 90),
    ],
}

MAX_SERVICES_PER_PROVIDER = 3

# Used when a provider has no active service at all
FALLBACK_SERVICES = [
    ("Signature Facial", 85, 60),
    ("Deep Tissue Massage", 120, 90),
    ("Hair Cut & Style", 65, 75),
    ("Personal Training", 80, 60),
    ("Manicure & Pedicure", 55, 90),
]

TAG_IDS = {
    "Hair Stylist": 1,
    "Makeup Artist": 2,
    "Nail Technician": 3,
    "Barber": 4,
    "Esthetician": 5,
    "Massage Therapist": 6,
    "Personal Trainer": 7,
    "Photographer": 8,
    "Event Planner": 9,
    "Tutor": 10,
    "Music Teacher": 11,
    "Art Teacher": 12,
    "Dance Instructor": 13,
    "Life Coach": 14,
    "Nutritionist": 15,
}

DEFAULT_TAG_ID = 1

PROVIDER_ENHANCEMENTS = [
    {
        "full_name": "Sophia Grace",
        "bio": "Experienced academic tutor specializing in mathematics, science, and test preparation for students of all ages.",
        "tags": ["Tutor"],
        "location": (37.4419, -122.143, "Palo Alto, CA"),
        "services": [
            ("Math Tutoring", "Comprehensive math tutoring from algebra to calculus.", 60, 60),
            ("Science Tutoring", "Physics, chemistry, and biology tutoring for all levels.", 65, 60),
            ("SAT/ACT Prep", "Standardized test preparation and strategy sessions.", 80, 90),
        ],
    },
    {
        "full_name": "Marcus Williams",
        "bio": "Professional artist and art instructor teaching drawing, painting, and digital art techniques.",
        "tags": ["Art Teacher"],
        "location": (39.9526, -75.1652, "Philadelphia, PA"),
        "services": [
            ("Drawing Lessons", "Pencil, charcoal, and pen drawing instruction for all levels.", 70, 90),
            ("Painting Classes", "Acrylic, watercolor, and oil painting lessons.", 85, 120),
            ("Digital Art Tutoring", "Digital illustration and design software training.", 90, 90),
        ],
    },
    {
        "full_name": "Isabella Romano",
        "bio": "High-end hair stylist specializing in European cutting techniques and luxury hair treatments.",
        "tags": ["Hair Stylist"],
        "location": (41.8781, -87.6298, "Chicago, IL"),
        "services": [
            ("Luxury Haircut & Style", "Premium haircut service with European techniques.", 120, 120),
            ("Balayage & Highlights", "Hand-painted balayage and professional highlighting.", 250, 240),
            ("Keratin Treatment", "Professional keratin smoothing treatment.", 200, 180),
        ],
    },
    {
        "full_name": "Alexander Smith",
        "bio": "Licensed massage therapist specializing in therapeutic massage and pain management techniques.",
        "tags": ["Massage Therapist"],
        "location": (45.5152, -122.6784, "Portland, OR"),
        "services": [
            ("Therapeutic Massage", "Medical massage therapy for pain relief and healing.", 120, 90),
            ("Prenatal Massage", "Specialized massage therapy for expectant mothers.", 100, 75),
            ("Lymphatic Drainage", "Gentle massage to stimulate lymphatic system.", 110, 60),
        ],
    },
    {
        "full_name": "Maya Patel",
        "bio": "Celebrity makeup artist with expertise in high-fashion and editorial makeup artistry.",
        "tags": ["Makeup Artist"],
        "location": (40.7589, -73.9851, "New York, NY"),
        "services": [
            ("Editorial Makeup", "High-fashion makeup for shoots and editorials.", 300, 150),
            ("Red Carpet Makeup", "Camera-ready makeup for premieres and galas.", 250, 120),
            ("Airbrush Makeup", "Flawless airbrush application for any occasion.", 180, 90),
        ],
    },
    {
        "full_name": "Thomas Johnson",
        "bio": "Elite personal trainer and strength coach working with professional athletes and fitness enthusiasts.",
        "tags": ["Personal Trainer"],
        "location": (33.749, -84.388, "Atlanta, GA"),
        "services": [
            ("Elite Training Session", "One-on-one training built around athletic goals.", 150, 90),
            ("Strength Coaching", "Progressive strength programming and coaching.", 120, 75),
            ("Body Transformation", "Combined training and nutrition program.", 100, 60),
        ],
    },
    {
        "full_name": "Chloe Davis",
        "bio": "Advanced esthetician specializing in medical-grade skincare treatments and anti-aging procedures.",
        "tags": ["Esthetician"],
        "location": (36.1627, -86.7816, "Nashville, TN"),
        "services": [
            ("HydraFacial Treatment", "Deep cleansing, exfoliation and hydration in one treatment.", 150, 75),
            ("Microneedling", "Collagen induction therapy for skin renewal.", 200, 90),
            ("LED Light Therapy", "Light therapy for acne and anti-aging.", 80, 45),
        ],
    },
]
