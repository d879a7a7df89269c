# travelflow/data/recommended_plans.py
"""Canned itinerary templates offered on the start page."""

RECOMMENDED_PLANS = [
    {
        "id": "seoul-foodie-3days",
        "title": "서울 3박 4일 맛집 탐방",
        "destination": "서울",
        "duration": "3박 4일",
        "purpose": "맛집 탐방",
        "description": "서울의 유명 맛집과 전통 음식을 중심으로 한 미식 여행",
        "image": "🍜",
        "plans": [
            {
                "id": "plan-0",
                "title": "1일차 - 강남 & 홍대 맛집",
                "day": 1,
                "activities": [
                    {"id": "activity-0-0", "time": "12:00", "activity": "본죽 강남점에서 점심",
                     "location": "06292 서울특별시 강남구 테헤란로 152 강남파이낸스센터",
                     "description": "건강한 죽으로 여행 첫 끼 시작", "duration": 60},
                    {"id": "activity-0-1", "time": "15:00", "activity": "카페 투썸플레이스",
                     "location": "06236 서울특별시 강남구 테헤란로 427 위워크타워",
                     "description": "달콤한 디저트와 커피로 휴식", "duration": 90},
                    {"id": "activity-0-2", "time": "18:00", "activity": "홍대 치킨집 투어",
                     "location": "04039 서울특별시 마포구 양화로 188 (동교동)",
                     "description": "한국의 대표 야식 치킨 맛보기", "duration": 120},
                ],
            },
            {
                "id": "plan-1",
                "title": "2일차 - 명동 & 동대문 전통 음식",
                "day": 2,
                "activities": [
                    {"id": "activity-1-0", "time": "09:00", "activity": "명동교자 본점",
                     "location": "04536 서울특별시 중구 명동10길 29 (명동2가)",
                     "description": "서울 대표 만두집에서 아침식사", "duration": 60},
                    {"id": "activity-1-1", "time": "13:00", "activity": "광장시장 먹거리 투어",
                     "location": "03195 서울특별시 종로구 창경궁로 88",
                     "description": "빈대떡과 마약김밥 맛보기", "duration": 120},
                ],
            },
        ],
    },
    {
        "id": "jeju-nature-4days",
        "title": "제주도 3박 4일 자연 경관",
        "destination": "제주도",
        "duration": "3박 4일",
        "purpose": "자연 경관",
        "description": "제주도의 아름다운 자연과 바다를 만끽하는 힐링 여행",
        "image": "🌊",
        "plans": [
            {
                "id": "plan-0",
                "title": "1일차 - 서귀포 해안가",
                "day": 1,
                "activities": [
                    {"id": "activity-0-0", "time": "10:00", "activity": "정방폭포 관람",
                     "location": "63565 제주특별자치도 서귀포시 칠십리로214번길 37 (정방동)",
                     "description": "바다로 직접 떨어지는 폭포의 장관", "duration": 90},
                    {"id": "activity-0-1", "time": "14:00", "activity": "천지연폭포 산책",
                     "location": "63546 제주특별자치도 서귀포시 남성중로 2-15 (천지동)",
                     "description": "신비로운 계곡과 폭포 트레킹", "duration": 120},
                    {"id": "activity-0-2", "time": "17:00", "activity": "서귀포 매일올레시장",
                     "location": "63594 제주특별자치도 서귀포시 중앙로62번길 18 (서귀동)",
                     "description": "현지 특산품과 제주 흑돼지 맛보기", "duration": 90},
                ],
            },
            {
                "id": "plan-1",
                "title": "2일차 - 한라산 & 성산일출봉",
                "day": 2,
                "activities": [
                    {"id": "activity-1-0", "time": "06:00", "activity": "성산일출봉 일출 관람",
                     "location": "63643 제주특별자치도 서귀포시 성산읍 일출로 284-12",
                     "description": "제주도 대표 일출 명소에서 새벽 일출", "duration": 120},
                    {"id": "activity-1-1", "time": "10:00", "activity": "한라산 등반 (어리목 코스)",
                     "location": "63340 제주특별자치도 제주시 1100로 2070-61 (연동)",
                     "description": "제주도 최고봉 한라산 트레킹", "duration": 300},
                    {"id": "activity-1-2", "time": "18:00", "activity": "애월 해안도로 드라이브",
                     "location": "63055 제주특별자치도 제주시 애월읍 애월해안로 522",
                     "description": "아름다운 해안선 따라 드라이브"},
                ],
            },
        ],
    },
]
