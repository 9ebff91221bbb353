from feedhub.api.routes import changelogs, feedback, projects, roadmap, system, tags

__all__ = ["changelogs", "feedback", "projects", "roadmap", "system", "tags"]
