"""ComparativeAnalyzer: two class averages side by side, no cross-class normalization."""

from schemas.analysis import ClassAverageEntry, ComparativeResult
from schemas.gradebook import GradebookSnapshot
from services.gradebook.class_statistics import compute_class_statistics
from services.gradebook.score_aggregator import class_percentages


def class_average_entry(snapshot: GradebookSnapshot) -> ClassAverageEntry:
    stats = compute_class_statistics(snapshot.students, class_percentages(snapshot))
    return ClassAverageEntry(
        class_id=snapshot.class_info.id,
        class_name=snapshot.class_info.class_name,
        average=stats.average,
        scored_students=len(stats.ranked_students),
    )


def compare_classes(snapshot_a: GradebookSnapshot, snapshot_b: GradebookSnapshot) -> ComparativeResult:
    return ComparativeResult(class_a=class_average_entry(snapshot_a), class_b=class_average_entry(snapshot_b))
