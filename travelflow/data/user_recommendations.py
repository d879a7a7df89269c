# travelflow/data/user_recommendations.py
"""Seed community recommendations, written to the store on first load."""

SAMPLE_USER_RECOMMENDATIONS = [
    {
        "id": "user-rec-1",
        "title": "부산 3박 4일 감성 여행 코스",
        "description": "부산의 바다와 맛집을 만끽할 수 있는 알찬 여행 코스입니다. 특히 해운대와 광안리의 야경이 정말 아름다웠어요!",
        "author": "여행러버김씨",
        "author_avatar": "👩‍🦱",
        "location": "부산",
        "duration": 4,
        "tags": ["바다", "맛집", "야경", "감성", "SNS"],
        "rating": 4.8,
        "budget": "50만원 이하",
        "season": "가을",
        "travel_style": "커플",
        "plans": [
            {
                "id": "day1-busan",
                "title": "1일차 - 해운대 도착 & 탐방",
                "day": 1,
                "activities": [
                    {"id": "act1-1", "time": "14:00", "activity": "해운대 해수욕장 산책",
                     "location": "48099 부산광역시 해운대구 우동 1411-23",
                     "description": "파도 소리를 들으며 여유로운 시간을 보냈습니다.", "duration": 90},
                    {"id": "act1-2", "time": "16:00", "activity": "더베이101 전망대",
                     "location": "48099 부산광역시 해운대구 동백로 52",
                     "description": "해운대를 한눈에 내려다볼 수 있는 전망대.", "duration": 60},
                ],
            },
            {
                "id": "day2-busan",
                "title": "2일차 - 감천문화마을 & 자갈치시장",
                "day": 2,
                "activities": [
                    {"id": "act2-1", "time": "10:00", "activity": "감천문화마을 탐방",
                     "location": "49310 부산광역시 사하구 감내2로 203",
                     "description": "색색의 집들이 너무 예뻤어요.", "duration": 180},
                    {"id": "act2-2", "time": "19:00", "activity": "광안리 해변 야경 감상",
                     "location": "48303 부산광역시 수영구 광안해변로 219",
                     "description": "광안대교와 함께하는 야경."},
                ],
            },
        ],
        "photos": ["🏖️", "🌉"],
        "tips": ["해운대는 주말에 매우 붐비니 평일 방문을 추천해요", "감천문화마을은 편한 신발 필수!"],
        "created_at": "2024-01-15",
        "likes": 127,
        "views": 2340,
        "is_recommended": True,
    },
    {
        "id": "user-rec-2",
        "title": "제주도 힐링 여행 5박 6일",
        "description": "렌터카로 제주 곳곳의 오름과 카페를 여유롭게 돌아본 가족 여행입니다.",
        "author": "제주사랑",
        "author_avatar": "🧑‍🌾",
        "location": "제주도",
        "duration": 6,
        "tags": ["자연", "힐링", "렌터카", "카페", "오름"],
        "rating": 4.9,
        "budget": "100만원 이상",
        "season": "봄",
        "travel_style": "가족",
        "plans": [
            {
                "id": "day1-jeju",
                "title": "1일차 - 제주공항 도착 & 제주시 탐방",
                "day": 1,
                "activities": [
                    {"id": "act1-1", "time": "11:00", "activity": "제주공항 도착",
                     "location": "63282 제주특별자치도 제주시 공항로 2",
                     "description": "렌터카 픽업 후 출발", "duration": 60},
                    {"id": "act1-2", "time": "13:00", "activity": "용두암",
                     "location": "63102 제주특별자치도 제주시 용두암길 15",
                     "description": "바다 바위 산책", "duration": 60},
                ],
            },
        ],
        "photos": ["🌋", "🍊"],
        "tips": ["렌터카는 미리 예약하세요"],
        "created_at": "2024-01-10",
        "likes": 89,
        "views": 1850,
        "is_recommended": True,
    },
    {
        "id": "user-rec-3",
        "title": "경주 역사 문화 탐방 2박 3일",
        "description": "불국사와 석굴암, 대릉원까지 천년 고도의 유적지를 혼자 걸어본 코스.",
        "author": "역사덕후",
        "author_avatar": "👨‍🎓",
        "location": "경주",
        "duration": 3,
        "tags": ["역사", "문화", "유적지", "한옥", "전통"],
        "rating": 4.6,
        "budget": "30만원 이하",
        "season": "봄",
        "travel_style": "혼자",
        "plans": [
            {
                "id": "day1-gyeongju",
                "title": "1일차 - 불국사 & 석굴암",
                "day": 1,
                "activities": [
                    {"id": "act1-1", "time": "09:00", "activity": "불국사",
                     "location": "38116 경상북도 경주시 불국로 385",
                     "description": "다보탑과 석가탑", "duration": 120},
                    {"id": "act1-2", "time": "13:00", "activity": "석굴암",
                     "location": "38117 경상북도 경주시 불국로 873-243",
                     "description": "본존불 관람", "duration": 90},
                ],
            },
        ],
        "photos": ["🏯"],
        "tips": ["자전거 대여가 편해요"],
        "created_at": "2024-01-08",
        "likes": 64,
        "views": 1320,
        "is_recommended": False,
    },
]
