"""CoachHub API: programs, workouts, chats and posts for trainers and trainees."""
