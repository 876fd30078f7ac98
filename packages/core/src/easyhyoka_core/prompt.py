"""Prompt construction for the evaluation summary.

The activity is serialized as JSONL, one self-contained object per line:
pull requests first, then issues, each in the order received. Nothing in
here reads the clock or iterates an unordered collection, so the same
records in the same order always produce the same bytes.

No size cap is applied. If the prompt is too large for the model, the
provider call fails with a ServiceFailure instead of the evaluation
silently losing data.
"""

from __future__ import annotations

import json
from collections import Counter
from dataclasses import dataclass
from typing import TYPE_CHECKING

from easyhyoka_core.models import ActivityState

if TYPE_CHECKING:
    from easyhyoka_core.models import ActivityRecord, ActivityScope, Comment


@dataclass(frozen=True)
class PromptTemplate:
    """Fixed wording wrapped around the activity data.

    ``header`` is formatted with ``author``, ``owner``, ``since`` and ``until``.
    """

    system: str
    header: str
    instructions: str


DEFAULT_TEMPLATE = PromptTemplate(
    system=(
        "あなたはエンジニアの人事評価を支援するアシスタントです。"
        "与えられたGitHubの活動データから成果と貢献を読み取り、その価値が正しく伝わる評価サマリーを作成します。"
        "小さなPRも大きな取り組みの一部として捉え、技術的な挑戦やビジネスへの影響を適切に評価してください。"
    ),
    header="以下は{author}の{owner}における{since}から{until}までのGitHub活動データです。\n\n",
    instructions="""\
以上のJSONLデータを分析し、評価期間中のエンジニアの実績を最大限に評価するサマリーを日本語で作成してください。

【分析の観点】
- タイトルやdescriptionから関連するPRをまとめ、一つのプロジェクトや機能開発として捉える
- descriptionの詳しさやコメントの量から、技術的な難易度や重要度を推測する
- バグ修正、リファクタリング、ドキュメント改善などの小さなPRも品質向上への貢献として評価する
- リポジトリごとの活動から、各プロジェクトで担っていた役割を推測する

【評価サマリーに含める項目】
1. エグゼクティブサマリー（特に印象的な成果を3〜5点の箇条書きで）
2. プロジェクト別の貢献内容
   - リポジトリごとの主な取り組みと成果
   - 関連するPRをまとめた一つの成果としての説明
3. 技術的なリーダーシップ
   - 新しい技術の導入やアーキテクチャの改善
   - コードレビューでの貢献（コメントから読み取れる場合）
4. ビジネスインパクト
   - 機能開発によるユーザー価値の向上
   - パフォーマンス改善や品質向上の取り組み
5. チームへの貢献
   - コラボレーションの姿勢
   - ドキュメント整備やツール改善
6. 継続的な成長
   - 期間を通じた成長や学習の跡
   - 新しい領域への挑戦
7. 総合評価と今後への期待

【重要】成果を最大限にアピールし、エンジニアの価値を適切に表現してください。
""",
)


def _comment_to_dict(comment: Comment) -> dict:
    return {
        "author": comment.author,
        "created_at": comment.created_at.isoformat(),
        "body": comment.body,
    }


def serialize_record(record: ActivityRecord) -> str:
    """Render one record as a single JSON line.

    The ``comments`` key is present only for enriched records, so the model
    (and the tests) can tell "not fetched" apart from "no comments".
    """
    data = {
        "kind": record.kind.value,
        "identifier": record.identifier,
        "repository": record.repository,
        "number": record.number,
        "title": record.title,
        "url": record.url,
        "state": record.state.value,
        "created_at": record.created_at.isoformat(),
        "updated_at": record.updated_at.isoformat(),
        "description": record.body,
    }
    if record.is_enriched:
        data["comments"] = [_comment_to_dict(c) for c in record.comments]
    return json.dumps(data, ensure_ascii=False)


def _block(title: str, records: list[ActivityRecord]) -> str:
    lines = [f"## {title}（JSONL形式）", "```"]
    lines.extend(serialize_record(r) for r in records)
    lines.append("```")
    return "\n".join(lines) + "\n"


def build_document(prs: list[ActivityRecord], issues: list[ActivityRecord]) -> str:
    """Serialize both record sets: the pull request block, then the issue block."""
    return _block("Pull Requestデータ", prs) + "\n" + _block("Issueデータ", issues)


def build_stats(prs: list[ActivityRecord], issues: list[ActivityRecord]) -> str:
    pr_states = Counter(r.state for r in prs)
    issue_states = Counter(r.state for r in issues)

    lines = ["## 統計サマリー"]
    lines.append(
        f"- Pull Request総数: {len(prs)}件"
        f"（マージ済み: {pr_states[ActivityState.MERGED]}件、"
        f"オープン: {pr_states[ActivityState.OPEN]}件、"
        f"クローズ: {pr_states[ActivityState.CLOSED]}件）"
    )
    lines.append(
        f"- Issue総数: {len(issues)}件"
        f"（オープン: {issue_states[ActivityState.OPEN]}件、"
        f"クローズ: {issue_states[ActivityState.CLOSED]}件）"
    )

    repo_counts = Counter(r.repository for r in prs)
    if repo_counts:
        lines.append("- リポジトリ別Pull Request数:")
        # Name breaks ties so the order never depends on Counter internals.
        for repo, count in sorted(repo_counts.items(), key=lambda item: (-item[1], item[0])):
            lines.append(f"  - {repo}: {count}件")

    return "\n".join(lines) + "\n"


def build_prompt(
    prs: list[ActivityRecord],
    issues: list[ActivityRecord],
    scope: ActivityScope | None = None,
    template: PromptTemplate = DEFAULT_TEMPLATE,
) -> str:
    """Build the user prompt sent to the model: header, stats, JSONL data, instructions."""
    parts = []
    if scope is not None:
        parts.append(
            template.header.format(
                author=scope.author or "全メンバー",
                owner=scope.owner,
                since=scope.since.isoformat(),
                until=scope.until.isoformat(),
            )
        )
    parts.append(build_stats(prs, issues))
    parts.append("\n")
    parts.append(build_document(prs, issues))
    parts.append("\n")
    parts.append(template.instructions)
    return "".join(parts)
