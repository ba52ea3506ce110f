"""Per-entity search adapters producing normalized ``SearchResult`` lists.

Each adapter scores every searchable field, keeps a weighted maximum (the
primary field counts in full, secondary fields are discounted) and drops
candidates below the minimum score. The single highlight entry always comes
from the primary field, even when a secondary field won.
"""

from collections.abc import Iterable, Sequence

from tasklens.config import get_settings
from tasklens.search.models import Highlight, SearchableType, SearchResult
from tasklens.search.scoring import calculate_score, find_highlights
from tasklens.tasks.models import Project, ProjectMember, Task, User

# Percentages applied to secondary-field scores
DESCRIPTION_WEIGHT = 70
EMAIL_WEIGHT = 80


def weighted(score: int, weight: int) -> int:
    """Discount ``score`` by ``weight`` percent, rounding down."""
    return score * weight // 100


def _min_score(min_score: int | None) -> int:
    return get_settings().min_score if min_score is None else min_score


def _rank(results: Iterable[SearchResult]) -> list[SearchResult]:
    # sorted() is stable, equal scores keep collection order
    return sorted(results, key=lambda result: result.score, reverse=True)


def search_tasks(
    tasks: Sequence[Task], query: str, min_score: int | None = None
) -> list[SearchResult]:
    """Rank tasks by title, then discounted description, relevance."""
    threshold = _min_score(min_score)
    results: list[SearchResult] = []

    for task in tasks:
        title_score = calculate_score(query, task.title)
        desc_score = calculate_score(query, task.description) if task.description else 0
        score = max(title_score, weighted(desc_score, DESCRIPTION_WEIGHT))

        if score < threshold:
            continue

        results.append(
            SearchResult(
                id=task.id,
                type=SearchableType.TASK,
                title=task.title,
                description=task.description,
                subtitle=f"{task.status.value} • {task.priority.value}",
                metadata={
                    "status": task.status.value,
                    "priority": task.priority.value,
                    "due_date": task.due_date,
                    "assignees": [
                        {"id": user.id, "name": user.name} for user in task.assignees
                    ],
                    "tags": task.tag_ids,
                    "project_id": task.project_id,
                },
                score=score,
                highlights=[
                    Highlight(
                        field="title",
                        text=task.title,
                        indices=find_highlights(query, task.title),
                    )
                ],
            )
        )

    return _rank(results)


def search_projects(
    projects: Sequence[Project], query: str, min_score: int | None = None
) -> list[SearchResult]:
    """Rank projects by name, then discounted description, relevance."""
    threshold = _min_score(min_score)
    results: list[SearchResult] = []

    for project in projects:
        name_score = calculate_score(query, project.name)
        desc_score = (
            calculate_score(query, project.description) if project.description else 0
        )
        score = max(name_score, weighted(desc_score, DESCRIPTION_WEIGHT))

        if score < threshold:
            continue

        results.append(
            SearchResult(
                id=project.id,
                type=SearchableType.PROJECT,
                title=project.name,
                description=project.description,
                subtitle=f"{project.status.value} • {project.progress}%",
                metadata={
                    "status": project.status.value,
                    "progress": project.progress,
                    "members": [
                        member.model_dump() if isinstance(member, ProjectMember) else member
                        for member in project.members
                    ],
                    # date sorting reads due_date for every result type
                    "due_date": project.deadline,
                    "tags": project.tag_ids,
                },
                score=score,
                highlights=[
                    Highlight(
                        field="title",
                        text=project.name,
                        indices=find_highlights(query, project.name),
                    )
                ],
            )
        )

    return _rank(results)


def search_users(
    users: Sequence[User], query: str, min_score: int | None = None
) -> list[SearchResult]:
    """Rank users by name, then discounted email, relevance."""
    threshold = _min_score(min_score)
    results: list[SearchResult] = []

    for user in users:
        name_score = calculate_score(query, user.name)
        email_score = calculate_score(query, user.email)
        score = max(name_score, weighted(email_score, EMAIL_WEIGHT))

        if score < threshold:
            continue

        results.append(
            SearchResult(
                id=user.id,
                type=SearchableType.USER,
                title=user.name,
                subtitle=user.email,
                description=user.role,
                metadata={
                    "role": user.role,
                    "avatar_url": user.avatar_url,
                },
                score=score,
                highlights=[
                    Highlight(
                        field="name",
                        text=user.name,
                        indices=find_highlights(query, user.name),
                    )
                ],
            )
        )

    return _rank(results)


def search_entities(
    query: str,
    tasks: Sequence[Task] = (),
    projects: Sequence[Project] = (),
    users: Sequence[User] = (),
    types: Iterable[SearchableType | str] | None = None,
    min_score: int | None = None,
) -> list[SearchResult]:
    """Search several collections at once and merge them by score.

    ``types`` limits which collections are searched; ``None`` or a set
    containing ``all`` searches every collection. Ties keep task, project,
    user order.
    """
    wanted = {SearchableType(t) for t in types} if types else {SearchableType.ALL}
    search_all = SearchableType.ALL in wanted

    results: list[SearchResult] = []
    if search_all or SearchableType.TASK in wanted:
        results.extend(search_tasks(tasks, query, min_score))
    if search_all or SearchableType.PROJECT in wanted:
        results.extend(search_projects(projects, query, min_score))
    if search_all or SearchableType.USER in wanted:
        results.extend(search_users(users, query, min_score))

    return _rank(results)
