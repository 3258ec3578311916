DEFAULT_TOPICS: list[str] = [
    "Politics",
    "Economy",
    "Technology",
    "Science",
    "Health",
    "Education",
    "Sports",
    "Entertainment",
    "Travel",
    "Environment",
]
