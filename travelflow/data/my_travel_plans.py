# travelflow/data/my_travel_plans.py
"""Seed trips for the "my plans" page, written to the store on first load."""

SAMPLE_MY_TRAVEL_PLANS = [
    {
        "id": "my-plan-1",
        "title": "부산 3박 4일 맛집 여행",
        "destination": "부산",
        "start_date": "2024-03-15",
        "end_date": "2024-03-18",
        "duration": "3박 4일",
        "purpose": "맛집 탐방",
        "status": "completed",
        "created_at": "2024-02-20T10:00:00Z",
        "updated_at": "2024-03-18T18:00:00Z",
        "collaborators": ["user-current", "user-1", "user-2"],
        "is_public": True,
        "image": "🦐",
        "description": "부산의 유명 맛집들과 해운대, 광안리를 즐기는 미식 여행",
        "budget": {"total": 800000, "spent": 750000, "currency": "KRW"},
        "plans": [
            {
                "id": "plan-0",
                "title": "1일차",
                "day": 1,
                "activities": [
                    {"id": "act-1-1", "time": "10:00", "activity": "부산역 도착",
                     "location": "부산광역시 동구 중앙대로 206", "description": "KTX로 도착", "duration": 30},
                    {"id": "act-1-2", "time": "12:00", "activity": "돼지국밥 맛집 - 송정3대국밥",
                     "location": "부산광역시 해운대구 송정해변로 10", "description": "부산 대표 돼지국밥", "duration": 60},
                    {"id": "act-1-3", "time": "15:00", "activity": "해운대 해수욕장 산책",
                     "location": "부산광역시 해운대구 우동", "description": "", "duration": 120},
                ],
            },
            {
                "id": "plan-1",
                "title": "2일차",
                "day": 2,
                "activities": [
                    {"id": "act-2-1", "time": "09:00", "activity": "자갈치시장 구경",
                     "location": "부산광역시 중구 자갈치해안로 52", "description": "신선한 회와 해산물", "duration": 120},
                    {"id": "act-2-2", "time": "14:00", "activity": "감천문화마을 탐방",
                     "location": "부산광역시 사하구 감천동", "description": "", "duration": 180},
                ],
            },
        ],
    },
    {
        "id": "my-plan-2",
        "title": "제주도 힐링 여행",
        "destination": "제주도",
        "start_date": "2024-05-10",
        "end_date": "2024-05-13",
        "duration": "3박 4일",
        "purpose": "힐링",
        "status": "planning",
        "created_at": "2024-04-01T09:00:00Z",
        "updated_at": "2024-04-15T16:30:00Z",
        "collaborators": ["user-current", "user-3"],
        "is_public": False,
        "image": "🌺",
        "description": "제주도의 아름다운 자연과 함께하는 힐링 여행",
        "budget": {"total": 1200000, "spent": 200000, "currency": "KRW"},
        "plans": [
            {
                "id": "plan-0",
                "title": "1일차",
                "day": 1,
                "activities": [
                    {"id": "act-3-1", "time": "11:00", "activity": "제주공항 도착",
                     "location": "제주특별자치도 제주시 공항로 2", "description": "항공료 포함", "duration": 60},
                    {"id": "act-3-2", "time": "15:00", "activity": "한라산 둘레길 산책",
                     "location": "제주특별자치도 제주시 1100로", "description": "", "duration": 180},
                ],
            },
        ],
    },
    {
        "id": "my-plan-3",
        "title": "서울 카페 투어",
        "destination": "서울",
        "start_date": "2024-02-03",
        "end_date": "2024-02-04",
        "duration": "1박 2일",
        "purpose": "카페 투어",
        "status": "completed",
        "created_at": "2024-01-15T14:00:00Z",
        "updated_at": "2024-02-04T20:00:00Z",
        "collaborators": ["user-current"],
        "is_public": True,
        "image": "☕",
        "description": "서울의 핫한 카페들을 돌아보는 주말 여행",
        "budget": {"total": 300000, "spent": 280000, "currency": "KRW"},
        "plans": [
            {
                "id": "plan-0",
                "title": "1일차",
                "day": 1,
                "activities": [
                    {"id": "act-4-1", "time": "10:00", "activity": "성수동 카페거리",
                     "location": "서울특별시 성동구 성수동1가", "description": "트렌디한 카페들이 모여있는 곳",
                     "duration": 240},
                    {"id": "act-4-2", "time": "16:00", "activity": "한남동 루프탑 카페",
                     "location": "서울특별시 용산구 한남동", "description": "", "duration": 120},
                ],
            },
        ],
    },
    {
        "id": "my-plan-4",
        "title": "강릉 바다 여행",
        "destination": "강릉",
        "start_date": "2024-06-20",
        "end_date": "2024-06-22",
        "duration": "2박 3일",
        "purpose": "자연 탐방",
        "status": "planning",
        "created_at": "2024-04-10T11:00:00Z",
        "updated_at": "2024-04-20T15:00:00Z",
        "collaborators": ["user-current", "user-1", "user-4"],
        "is_public": False,
        "image": "🌊",
        "description": "동해안의 아름다운 바다와 해변을 즐기는 여행",
        "budget": {"total": 600000, "spent": 0, "currency": "KRW"},
        "plans": [
            {
                "id": "plan-0",
                "title": "1일차",
                "day": 1,
                "activities": [
                    {"id": "act-5-1", "time": "09:00", "activity": "경포해변 산책",
                     "location": "강원특별자치도 강릉시 창해로", "description": "", "duration": 120},
                ],
            },
        ],
    },
    {
        "id": "my-plan-5",
        "title": "교토 문화 체험",
        "destination": "교토",
        "start_date": "2023-11-15",
        "end_date": "2023-11-19",
        "duration": "4박 5일",
        "purpose": "문화 체험",
        "status": "completed",
        "created_at": "2023-09-10T10:00:00Z",
        "updated_at": "2023-11-19T22:00:00Z",
        "collaborators": ["user-current", "user-2"],
        "is_public": True,
        "image": "⛩️",
        "description": "일본 전통 문화를 체험하고 교토의 아름다운 사찰들을 둘러보는 여행",
        "budget": {"total": 1500000, "spent": 1420000, "currency": "KRW"},
        "plans": [
            {
                "id": "plan-0",
                "title": "1일차",
                "day": 1,
                "activities": [
                    {"id": "act-6-1", "time": "14:00", "activity": "후시미 이나리 대사",
                     "location": "68 Fukakusa Yabunouchicho, Fushimi Ward, Kyoto",
                     "description": "천 개의 도리이로 유명한 곳", "duration": 180},
                ],
            },
        ],
    },
    {
        "id": "my-plan-6",
        "title": "전주 한옥마을 여행",
        "destination": "전주",
        "start_date": "2024-07-05",
        "end_date": "2024-07-07",
        "duration": "2박 3일",
        "purpose": "문화 체험",
        "status": "cancelled",
        "created_at": "2024-03-20T13:00:00Z",
        "updated_at": "2024-06-01T09:00:00Z",
        "collaborators": ["user-current"],
        "is_public": False,
        "image": "🏯",
        "description": "전통 한옥과 맛있는 전주 음식을 즐기는 여행 (일정 변경으로 취소)",
        "plans": [],
    },
]
