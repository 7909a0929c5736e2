from game_api.services.progress import list_progress, save_best_score

__all__ = ["list_progress", "save_best_score"]
