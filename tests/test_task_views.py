# tests/test_task_views.py

from __future__ import annotations

from focuslist.tasks.task_models import TaskRole
from focuslist.tasks.task_views import group_completed, project_views, sort_tasks

from .fakes import make_task

TODAY = TaskRole.TODAY
BACKLOG = TaskRole.BACKLOG
TEMPLATE = TaskRole.TEMPLATE


def test_sort_incomplete_first_then_newest() -> None:
    tasks = [
        make_task("old", "old", created_at=100),
        make_task("done-new", "done new", completed=True, created_at=900),
        make_task("new", "new", created_at=500),
        make_task("done-old", "done old", completed=True, created_at=200),
    ]
    assert [t.id for t in sort_tasks(tasks)] == ["new", "old", "done-new", "done-old"]


def test_completed_same_name_tasks_are_grouped() -> None:
    tasks = [
        make_task("c1", "Coffee break", role=TODAY, completed=True, created_at=300),
        make_task("c2", "Coffee break", role=TODAY, completed=True, created_at=100),
        make_task("w1", "Write report", role=TODAY, completed=True, created_at=200),
    ]

    views = project_views(tasks)

    assert [(g.text, g.count) for g in views.completed_groups] == [
        ("Coffee break", 2),
        ("Write report", 1),
    ]
    coffee = views.completed_groups[0]
    assert coffee.representative.created_at == 300
    assert coffee.first_completed_at == 300
    assert coffee.task_ids == ("c1", "c2")
    assert coffee.delete_target == "c1"


def test_group_order_uses_representative_timestamp() -> None:
    # "A" is first encountered at 50 even though a later "A" exists; order by the representative only.
    tasks = [
        make_task("a1", "A", role=TODAY, completed=True, created_at=50),
        make_task("b1", "B", role=TODAY, completed=True, created_at=70),
        make_task("a2", "A", role=TODAY, completed=True, created_at=90),
    ]
    groups = group_completed(tasks)
    assert [g.text for g in groups] == ["B", "A"]
    assert groups[1].task_ids == ("a1", "a2")


def test_grouping_is_exact_text_match() -> None:
    tasks = [
        make_task("a", "Run", role=TODAY, completed=True, created_at=2),
        make_task("b", "run", role=TODAY, completed=True, created_at=1),
    ]
    assert len(project_views(tasks).completed_groups) == 2


def test_split_and_counts() -> None:
    tasks = [
        make_task("t1", "Today open", role=TODAY, created_at=10),
        make_task("t2", "Today done", role=TODAY, completed=True, created_at=20),
        make_task("b1", "Backlog", role=BACKLOG, created_at=30),
        make_task("r1", "Template", role=TEMPLATE, created_at=40),
    ]

    views = project_views(tasks)

    assert [t.id for t in views.today] == ["t1", "t2"]
    assert [t.id for t in views.today_active] == ["t1"]
    assert [t.id for t in views.backlog] == ["r1", "b1"]
    assert views.total_today == 2
    assert views.completed_today == 1


def test_tag_filter_applies_to_lists_but_not_tag_bar() -> None:
    tasks = [
        make_task("t1", "Email boss #work", role=TODAY, created_at=1),
        make_task("t2", "Walk dog #home", role=TODAY, completed=True, created_at=2),
        make_task("b1", "Fix sink #home #diy", created_at=3),
        make_task("b2", "Quarterly plan #work", created_at=4),
    ]

    views = project_views(tasks, "home")

    assert views.active_tag == "home"
    assert [t.id for t in views.today] == ["t2"]
    assert [t.id for t in views.backlog] == ["b1"]
    assert views.total_today == 1
    assert views.completed_today == 1
    assert views.all_tags == ("diy", "home", "work")


def test_no_filter_passes_everything_through() -> None:
    tasks = [make_task("a", "untagged"), make_task("b", "tagged #x")]
    views = project_views(tasks, None)
    assert {t.id for t in views.backlog} == {"a", "b"}
    assert views.active_tag is None


def test_deleting_group_representative_decrements_count() -> None:
    tasks = (
        make_task("c1", "Coffee break", role=TODAY, completed=True, created_at=300),
        make_task("c2", "Coffee break", role=TODAY, completed=True, created_at=100),
    )
    group = project_views(tasks).completed_groups[0]
    remaining = tuple(t for t in tasks if t.id != group.delete_target)

    regrouped = project_views(remaining).completed_groups
    assert len(regrouped) == 1
    assert regrouped[0].count == 1
    assert regrouped[0].representative.id == "c2"
