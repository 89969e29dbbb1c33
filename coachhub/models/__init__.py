"""ORM models - import all so Base.metadata is complete for migrations."""

from coachhub.models.chat import Chat, ChatParticipant, Message
from coachhub.models.content import Content, ContentComment, ContentLike
from coachhub.models.program import Program, ProgramTrainee, ProgramWorkout
from coachhub.models.user import Follow, User, UserMetric
from coachhub.models.workout import Exercise, ExerciseSet, Workout

__all__ = [
    "Chat",
    "ChatParticipant",
    "Content",
    "ContentComment",
    "ContentLike",
    "Exercise",
    "ExerciseSet",
    "Follow",
    "Message",
    "Program",
    "ProgramTrainee",
    "ProgramWorkout",
    "User",
    "UserMetric",
    "Workout",
]
