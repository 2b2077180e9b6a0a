REACTION_TYPES = ("heart", "like", "dislike", "laugh", "smile", "surprise", "explode")

def empty_counts():
    return {reaction_type: 0 for reaction_type in REACTION_TYPES}
