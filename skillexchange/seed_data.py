"""Initial skill catalog, loaded by scripts/seed_skills.py."""

SKILLS_DATA = [
    # Programming & Development
    {
        'name': 'JavaScript',
        'description': 'Popular programming language for web development, both frontend and backend.',
        'category': 'Programming & Development',
        'subcategory': 'Web Development',
        'tags': ['programming', 'web', 'frontend', 'backend', 'nodejs', 'react', 'vue'],
        'trending': True,
        'popularity_score': 95,
        'available_levels': ['beginner', 'intermediate', 'advanced', 'expert'],
        'search_keywords': ['js', 'javascript', 'programming', 'web development'],
        'stats': {
            'total_users': 1245, 'teaching_users': 234, 'learning_users': 1011,
            'avg_rating': 4.5, 'total_sessions': 5420, 'total_reviews': 892,
        },
    },
    {
        'name': 'Python',
        'description': 'Versatile programming language great for beginners and experts alike.',
        'category': 'Programming & Development',
        'subcategory': 'Data Science',
        'tags': ['programming', 'data science', 'machine learning', 'web', 'automation'],
        'trending': True,
        'popularity_score': 92,
        'available_levels': ['beginner', 'intermediate', 'advanced', 'expert'],
        'search_keywords': ['python', 'programming', 'data science', 'ml'],
        'stats': {
            'total_users': 1156, 'teaching_users': 198, 'learning_users': 958,
            'avg_rating': 4.6, 'total_sessions': 4890, 'total_reviews': 756,
        },
    },
    {
        'name': 'React',
        'description': 'Popular JavaScript library for building user interfaces.',
        'category': 'Programming & Development',
        'subcategory': 'Web Development',
        'tags': ['react', 'javascript', 'frontend', 'ui', 'components'],
        'trending': True,
        'popularity_score': 89,
        'available_levels': ['beginner', 'intermediate', 'advanced', 'expert'],
        'search_keywords': ['react', 'reactjs', 'frontend', 'javascript'],
        'stats': {
            'total_users': 987, 'teaching_users': 156, 'learning_users': 831,
            'avg_rating': 4.4, 'total_sessions': 3210, 'total_reviews': 543,
        },
    },

    # Design & Creative
    {
        'name': 'Figma',
        'description': 'Collaborative design tool for creating user interfaces and prototypes.',
        'category': 'Design & Creative',
        'subcategory': 'UI/UX Design',
        'tags': ['design', 'ui', 'ux', 'prototyping', 'collaboration'],
        'trending': True,
        'popularity_score': 87,
        'available_levels': ['beginner', 'intermediate', 'advanced'],
        'search_keywords': ['figma', 'design', 'ui', 'ux', 'prototype'],
        'stats': {
            'total_users': 756, 'teaching_users': 123, 'learning_users': 633,
            'avg_rating': 4.7, 'total_sessions': 2340, 'total_reviews': 421,
        },
    },

    # Languages
    {
        'name': 'English',
        'description': 'Global language for communication, business, and education.',
        'category': 'Languages',
        'subcategory': 'English',
        'tags': ['language', 'communication', 'business', 'conversation'],
        'trending': False,
        'popularity_score': 85,
        'available_levels': ['beginner', 'intermediate', 'advanced', 'expert'],
        'search_keywords': ['english', 'language', 'communication', 'speaking'],
        'stats': {
            'total_users': 1456, 'teaching_users': 345, 'learning_users': 1111,
            'avg_rating': 4.3, 'total_sessions': 6780, 'total_reviews': 1234,
        },
    },
]
