"""CLI shell for the newsdesk admin client.

Every command except ``login`` requires a stored token. Each command drives
one page controller and prints its banner in red on failure.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from newsdesk.api.client import APIClient
from newsdesk.config import NewsdeskConfig, load_config, merge_cli_overrides
from newsdesk.errors import NotAuthenticatedError
from newsdesk.models import ArticleStatus, CommentStatus
from newsdesk.pages import (
    ArticleForm,
    ArticleListPage,
    CategoryListPage,
    CommentListPage,
    DashboardPage,
    LoginPage,
    MediaLibraryPage,
    NewsletterPage,
    Page,
    ProfileForm,
    SiteSettingsForm,
    TagListPage,
    format_file_size,
)
from newsdesk.query import QueryClient
from newsdesk.services import Services

app = typer.Typer(
    name="newsdesk",
    help="Manage articles, media, taxonomy, comments, and site settings.",
    no_args_is_help=True,
)
articles_app = typer.Typer(help="Author and publish articles.", no_args_is_help=True)
categories_app = typer.Typer(help="Manage categories.", no_args_is_help=True)
tags_app = typer.Typer(help="Manage tags.", no_args_is_help=True)
comments_app = typer.Typer(help="Moderate comments.", no_args_is_help=True)
media_app = typer.Typer(help="Manage the media library.", no_args_is_help=True)
newsletter_app = typer.Typer(help="Manage newsletter subscribers.", no_args_is_help=True)
settings_app = typer.Typer(help="View and edit site settings.", no_args_is_help=True)
profile_app = typer.Typer(help="View and edit your account.", no_args_is_help=True)

app.add_typer(articles_app, name="articles")
app.add_typer(categories_app, name="categories")
app.add_typer(tags_app, name="tags")
app.add_typer(comments_app, name="comments")
app.add_typer(media_app, name="media")
app.add_typer(newsletter_app, name="newsletter")
app.add_typer(settings_app, name="settings")
app.add_typer(profile_app, name="profile")

console = Console()

YesOption = Annotated[bool, typer.Option("--yes", "-y", help="Skip the confirmation prompt.")]


@dataclass
class Shell:
    """Per-invocation wiring: config, client, services, and the query cache."""

    config: NewsdeskConfig
    client: APIClient
    services: Services
    query: QueryClient

    @classmethod
    def from_config(cls, config: NewsdeskConfig) -> Shell:
        client = APIClient.from_config(config)
        return cls(
            config=config,
            client=client,
            services=Services.from_client(client),
            query=QueryClient(retries=config.api.retries),
        )


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        from newsdesk import __version__

        console.print(f"newsdesk {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    config_path: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Path to a .newsdesk.toml file."),
    ] = None,
    api_url: Annotated[
        Optional[str],
        typer.Option("--api-url", help="Backend base URL (e.g. https://news.example/api)."),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Log every request."),
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
) -> None:
    """Newsdesk - admin client for the news-publishing platform."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    config = merge_cli_overrides(load_config(config_path), api_url=api_url)
    ctx.obj = Shell.from_config(config)


# ── Helpers ──────────────────────────────────────────────────────────────


def _shell(ctx: typer.Context, *, auth: bool = True) -> Shell:
    shell: Shell = ctx.obj
    if auth and not shell.services.auth.is_authenticated:
        console.print(f"[red]Error:[/red] {NotAuthenticatedError().message}")
        raise typer.Exit(1)
    return shell


def _confirm(yes: bool):
    if yes:
        return lambda message: True
    return lambda message: typer.confirm(message, default=False)


def _page(cls: type[Page], ctx: typer.Context, yes: bool = False, **kwargs) -> Page:
    shell = _shell(ctx)
    return cls(shell.services, shell.query, _confirm(yes), **kwargs)


def _check(page: Page) -> None:
    if page.error:
        console.print(f"[red]Error:[/red] {page.error}")
        raise typer.Exit(1)


def _status_style(status: str) -> str:
    return {
        "published": "green",
        "approved": "green",
        "draft": "yellow",
        "pending": "yellow",
        "archived": "dim",
        "rejected": "red",
    }.get(status, "white")


# ── Authentication ───────────────────────────────────────────────────────


@app.command()
def login(
    ctx: typer.Context,
    identifier: Annotated[str, typer.Argument(help="Username or email address.")],
    password: Annotated[
        str,
        typer.Option(prompt=True, hide_input=True, help="Account password."),
    ],
) -> None:
    """Log in and store the token."""
    shell = _shell(ctx, auth=False)
    page = LoginPage(shell.services, shell.query)
    result = page.submit(identifier, password)
    _check(page)
    who = result.user.username or result.user.email
    console.print(f"[green]Logged in as {who}[/green] ({result.user.role})")


@app.command()
def logout(ctx: typer.Context) -> None:
    """Forget the stored token."""
    shell = _shell(ctx, auth=False)
    LoginPage(shell.services, shell.query).logout()
    console.print("Logged out.")


@app.command()
def whoami(ctx: typer.Context) -> None:
    """Show the logged-in account."""
    page = _page(ProfileForm, ctx)
    profile = page.load()
    _check(page)
    console.print(f"{profile.username or '-'} <{profile.email}> ({profile.role})")


@app.command()
def dashboard(ctx: typer.Context) -> None:
    """Show site-wide counters."""
    page = _page(DashboardPage, ctx)
    stats = page.load()
    _check(page)

    table = Table(title="Dashboard", show_header=False)
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    table.add_row("Articles", str(stats.total_articles))
    table.add_row("Published", str(stats.published_articles))
    table.add_row("Drafts", str(stats.draft_articles))
    table.add_row("Categories", str(stats.total_categories))
    table.add_row("Tags", str(stats.total_tags))
    table.add_row("Comments", f"{stats.total_comments} ({stats.pending_comments} pending)")
    table.add_row("Views", str(stats.total_views))
    table.add_row("Subscribers", str(stats.newsletter_subscribers))
    console.print(table)

    for title, rows in (("Trending", stats.trending_articles), ("Recent", stats.recent_articles)):
        if rows:
            console.print(f"\n[bold]{title}[/bold]")
            for row in rows:
                console.print(f"  #{row.id} {row.title} ({row.views or 0} views)")


# ── Articles ─────────────────────────────────────────────────────────────


@articles_app.command("list")
def articles_list(
    ctx: typer.Context,
    page_number: Annotated[int, typer.Option("--page", "-p", min=1)] = 1,
    search: Annotated[str, typer.Option("--search", "-s")] = "",
    status: Annotated[Optional[ArticleStatus], typer.Option("--status")] = None,
) -> None:
    """List articles, ten per page."""
    shell = _shell(ctx)
    page = ArticleListPage(shell.services, shell.query, page_size=shell.config.articles.page_size)
    page.set_search(search)
    page.set_status_filter(status)
    page.page = page_number
    page.load()
    _check(page)

    table = Table(title="Articles")
    table.add_column("ID", justify="right")
    table.add_column("Title")
    table.add_column("Category")
    table.add_column("Status")
    table.add_column("Views", justify="right")
    table.add_column("Scheduled")
    for article in page.articles:
        style = _status_style(article.status)
        table.add_row(
            str(article.id),
            article.title,
            article.category_name or "-",
            f"[{style}]{article.status}[/{style}]",
            str(article.views),
            article.scheduled_publish_date or "",
        )
    console.print(table)
    first, last = page.showing_range()
    console.print(f"Showing {first} to {last} of {page.total} articles")


@articles_app.command("show")
def articles_show(
    ctx: typer.Context,
    article_id: Annotated[int, typer.Argument()],
) -> None:
    """Show one article with its media gallery."""
    form = _page(ArticleForm, ctx, article_id=article_id)
    form.load()
    _check(form)
    fields = form.fields
    console.print(f"[bold]{fields['title']}[/bold]  ({fields['status']})")
    if fields["excerpt"]:
        console.print(fields["excerpt"])
    if fields["scheduled_publish_date"]:
        console.print(f"Scheduled: {fields['scheduled_publish_date']}")
    for item in form.gallery.items:
        console.print(f"  [{item.order}] {item.type}: {item.url}")
    console.print()
    console.print(fields["body"])


def _edit_article(
    form: ArticleForm,
    *,
    title: str | None,
    body: str | None,
    excerpt: str | None,
    category: int | None,
    status: ArticleStatus | None,
    schedule: str | None,
    media: list[Path] | None,
    media_url: list[str] | None,
) -> None:
    for field, value in (
        ("title", title),
        ("body", body),
        ("excerpt", excerpt),
        ("category_id", category),
        ("status", status),
        ("scheduled_publish_date", schedule),
    ):
        if value is not None:
            form.set(field, value)
    if media:
        form.gallery.add_uploads(media)
    for url in media_url or []:
        form.gallery.add_url(url)
    if form.gallery.error:
        console.print(f"[yellow]Warning:[/yellow] {form.gallery.error}")


TitleOpt = Annotated[Optional[str], typer.Option("--title", "-t")]
BodyOpt = Annotated[Optional[str], typer.Option("--body", "-b", help="Article body text.")]
ExcerptOpt = Annotated[Optional[str], typer.Option("--excerpt")]
CategoryOpt = Annotated[Optional[int], typer.Option("--category", help="Category id.")]
StatusOpt = Annotated[Optional[ArticleStatus], typer.Option("--status")]
ScheduleOpt = Annotated[
    Optional[str],
    typer.Option("--schedule", help="Publish date as YYYY-MM-DDTHH:MM; empty string clears it."),
]
MediaOpt = Annotated[
    Optional[list[Path]],
    typer.Option("--media", "-m", exists=True, dir_okay=False, help="Image/video file to upload."),
]
MediaUrlOpt = Annotated[Optional[list[str]], typer.Option("--media-url", help="Image/video URL.")]


@articles_app.command("create")
def articles_create(
    ctx: typer.Context,
    title: TitleOpt = None,
    body: BodyOpt = None,
    excerpt: ExcerptOpt = None,
    category: CategoryOpt = None,
    status: StatusOpt = None,
    schedule: ScheduleOpt = None,
    media: MediaOpt = None,
    media_url: MediaUrlOpt = None,
) -> None:
    """Create an article."""
    form = _page(ArticleForm, ctx)
    _edit_article(
        form,
        title=title,
        body=body,
        excerpt=excerpt,
        category=category,
        status=status,
        schedule=schedule,
        media=media,
        media_url=media_url,
    )
    article = form.submit()
    _check(form)
    console.print(f"[green]Created article #{article.id}[/green] {article.title}")


@articles_app.command("edit")
def articles_edit(
    ctx: typer.Context,
    article_id: Annotated[int, typer.Argument()],
    title: TitleOpt = None,
    body: BodyOpt = None,
    excerpt: ExcerptOpt = None,
    category: CategoryOpt = None,
    status: StatusOpt = None,
    schedule: ScheduleOpt = None,
    media: MediaOpt = None,
    media_url: MediaUrlOpt = None,
    remove_media: Annotated[
        Optional[list[int]],
        typer.Option("--remove-media", help="Gallery index to remove."),
    ] = None,
    move_media: Annotated[
        Optional[str],
        typer.Option("--move-media", help="Move a gallery item, as FROM:TO."),
    ] = None,
) -> None:
    """Edit an article and its media gallery."""
    form = _page(ArticleForm, ctx, article_id=article_id)
    form.load()
    _check(form)
    for index in sorted(remove_media or [], reverse=True):
        if 0 <= index < len(form.gallery):
            form.gallery.remove(index)
        else:
            console.print(f"[yellow]Warning:[/yellow] no gallery item at index {index}")
    if move_media:
        try:
            source, target = (int(part) for part in move_media.split(":", 1))
            form.gallery.move(source, target)
        except (ValueError, IndexError):
            console.print(f"[red]Error:[/red] Invalid --move-media value: {move_media}")
            raise typer.Exit(1)
    _edit_article(
        form,
        title=title,
        body=body,
        excerpt=excerpt,
        category=category,
        status=status,
        schedule=schedule,
        media=media,
        media_url=media_url,
    )
    article = form.submit()
    _check(form)
    console.print(f"[green]Updated article #{article.id}[/green] {article.title}")


@articles_app.command("delete")
def articles_delete(
    ctx: typer.Context,
    article_id: Annotated[int, typer.Argument()],
    yes: YesOption = False,
) -> None:
    """Delete an article."""
    page = _page(ArticleListPage, ctx, yes)
    if page.delete(article_id):
        console.print(f"Deleted article #{article_id}")
    _check(page)


@articles_app.command("bulk-status")
def articles_bulk_status(
    ctx: typer.Context,
    status: Annotated[ArticleStatus, typer.Argument()],
    article_ids: Annotated[list[int], typer.Argument(help="Article ids.")],
    yes: YesOption = False,
) -> None:
    """Set the status of several articles at once."""
    page = _page(ArticleListPage, ctx, yes)
    page.selected = set(article_ids)
    if page.bulk_set_status(status):
        console.print(f"Set {len(article_ids)} article(s) to {status}")
    _check(page)


@articles_app.command("bulk-delete")
def articles_bulk_delete(
    ctx: typer.Context,
    article_ids: Annotated[list[int], typer.Argument(help="Article ids.")],
    yes: YesOption = False,
) -> None:
    """Delete several articles at once."""
    page = _page(ArticleListPage, ctx, yes)
    page.selected = set(article_ids)
    if page.bulk_delete():
        console.print(f"Deleted {len(article_ids)} article(s)")
    _check(page)


# ── Categories and tags ─────────────────────────────────────────────────


def _taxonomy_list(page: CategoryListPage | TagListPage, title: str) -> None:
    page.load()
    _check(page)
    table = Table(title=title)
    table.add_column("ID", justify="right")
    table.add_column("Name")
    table.add_column("Slug")
    if page.with_description:
        table.add_column("Description")
    for row in page.rows:
        cells = [str(row.id), row.name, row.slug]
        if page.with_description:
            cells.append(row.description or "")
        table.add_row(*cells)
    console.print(table)


def _taxonomy_save(
    page: CategoryListPage | TagListPage,
    *,
    row_id: int | None,
    name: str | None,
    slug: str | None,
    description: str | None,
) -> None:
    form = page.form
    if row_id is None:
        form.open_create()
    else:
        rows = page.load()
        _check(page)
        row = next((r for r in rows if r.id == row_id), None)
        if row is None:
            console.print(f"[red]Error:[/red] No {page.label} with id {row_id}")
            raise typer.Exit(1)
        form.open_edit(row)
    if name is not None:
        form.set_name(name)
    if slug is not None:
        form.set_slug(slug)
    if description is not None:
        form.set_description(description)
    row = page.submit()
    _check(page)
    console.print(f"[green]Saved {page.label} #{row.id}[/green] {row.name} ({row.slug})")


@categories_app.command("list")
def categories_list(ctx: typer.Context) -> None:
    """List categories."""
    _taxonomy_list(_page(CategoryListPage, ctx), "Categories")


@categories_app.command("create")
def categories_create(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument()],
    slug: Annotated[Optional[str], typer.Option("--slug", help="Defaults to the name, hyphenated.")] = None,
    description: Annotated[Optional[str], typer.Option("--description")] = None,
) -> None:
    """Create a category."""
    page = _page(CategoryListPage, ctx)
    _taxonomy_save(page, row_id=None, name=name, slug=slug, description=description)


@categories_app.command("edit")
def categories_edit(
    ctx: typer.Context,
    category_id: Annotated[int, typer.Argument()],
    name: Annotated[Optional[str], typer.Option("--name")] = None,
    slug: Annotated[Optional[str], typer.Option("--slug")] = None,
    description: Annotated[Optional[str], typer.Option("--description")] = None,
) -> None:
    """Edit a category."""
    page = _page(CategoryListPage, ctx)
    _taxonomy_save(page, row_id=category_id, name=name, slug=slug, description=description)


@categories_app.command("delete")
def categories_delete(
    ctx: typer.Context,
    category_id: Annotated[int, typer.Argument()],
    yes: YesOption = False,
) -> None:
    """Delete a category."""
    page = _page(CategoryListPage, ctx, yes)
    if page.delete(category_id):
        console.print(f"Deleted category #{category_id}")
    _check(page)


@tags_app.command("list")
def tags_list(ctx: typer.Context) -> None:
    """List tags."""
    _taxonomy_list(_page(TagListPage, ctx), "Tags")


@tags_app.command("create")
def tags_create(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument()],
    slug: Annotated[Optional[str], typer.Option("--slug", help="Defaults to the name, hyphenated.")] = None,
) -> None:
    """Create a tag."""
    page = _page(TagListPage, ctx)
    _taxonomy_save(page, row_id=None, name=name, slug=slug, description=None)


@tags_app.command("edit")
def tags_edit(
    ctx: typer.Context,
    tag_id: Annotated[int, typer.Argument()],
    name: Annotated[Optional[str], typer.Option("--name")] = None,
    slug: Annotated[Optional[str], typer.Option("--slug")] = None,
) -> None:
    """Edit a tag."""
    page = _page(TagListPage, ctx)
    _taxonomy_save(page, row_id=tag_id, name=name, slug=slug, description=None)


@tags_app.command("delete")
def tags_delete(
    ctx: typer.Context,
    tag_id: Annotated[int, typer.Argument()],
    yes: YesOption = False,
) -> None:
    """Delete a tag."""
    page = _page(TagListPage, ctx, yes)
    if page.delete(tag_id):
        console.print(f"Deleted tag #{tag_id}")
    _check(page)


# ── Comments ─────────────────────────────────────────────────────────────


@comments_app.command("list")
def comments_list(
    ctx: typer.Context,
    status: Annotated[Optional[CommentStatus], typer.Option("--status")] = None,
    article_id: Annotated[Optional[int], typer.Option("--article")] = None,
) -> None:
    """List comments."""
    page = _page(CommentListPage, ctx)
    page.set_status_filter(status)
    page.article_id = article_id
    page.load()
    _check(page)
    if not page.comments:
        console.print("[yellow]No comments found.[/yellow]")
        return
    for comment in page.comments:
        style = _status_style(comment.status)
        console.print(
            f"#{comment.id} on article {comment.article_id} by {comment.author_name}"
            f" <{comment.author_email}> [{style}]{comment.status}[/{style}]"
        )
        console.print(f"  {comment.content}")


@comments_app.command("set-status")
def comments_set_status(
    ctx: typer.Context,
    comment_id: Annotated[int, typer.Argument()],
    status: Annotated[CommentStatus, typer.Argument()],
) -> None:
    """Approve, reject, or reset a comment to pending."""
    page = _page(CommentListPage, ctx)
    if page.set_status(comment_id, status):
        console.print(f"Comment #{comment_id} is now {status}")
    _check(page)


@comments_app.command("delete")
def comments_delete(
    ctx: typer.Context,
    comment_id: Annotated[int, typer.Argument()],
    yes: YesOption = False,
) -> None:
    """Delete a comment."""
    page = _page(CommentListPage, ctx, yes)
    if page.delete(comment_id):
        console.print(f"Deleted comment #{comment_id}")
    _check(page)


# ── Media ────────────────────────────────────────────────────────────────


@media_app.command("list")
def media_list(ctx: typer.Context) -> None:
    """List uploaded media."""
    page = _page(MediaLibraryPage, ctx)
    page.load()
    _check(page)
    table = Table(title="Media")
    table.add_column("ID", justify="right")
    table.add_column("File")
    table.add_column("Type")
    table.add_column("Size", justify="right")
    table.add_column("URL")
    for item in page.items:
        table.add_row(str(item.id), item.filename, item.mime_type, format_file_size(item.size), item.url)
    console.print(table)


@media_app.command("upload")
def media_upload(
    ctx: typer.Context,
    file_path: Annotated[Path, typer.Argument(exists=True, dir_okay=False)],
) -> None:
    """Upload an image or video (up to 100MB)."""
    page = _page(MediaLibraryPage, ctx)
    result = page.upload(file_path)
    _check(page)
    console.print(f"[green]Uploaded[/green] {result.url}")


@media_app.command("delete")
def media_delete(
    ctx: typer.Context,
    media_id: Annotated[int, typer.Argument()],
    yes: YesOption = False,
) -> None:
    """Delete a media file."""
    page = _page(MediaLibraryPage, ctx, yes)
    if page.delete(media_id):
        console.print(f"Deleted media #{media_id}")
    _check(page)


# ── Newsletter ───────────────────────────────────────────────────────────


@newsletter_app.command("list")
def newsletter_list(ctx: typer.Context) -> None:
    """List newsletter subscribers."""
    page = _page(NewsletterPage, ctx)
    page.load()
    _check(page)
    table = Table(title=f"Subscribers ({len(page.subscribers)})")
    table.add_column("ID", justify="right")
    table.add_column("Email")
    table.add_column("Subscribed")
    for sub in page.subscribers:
        table.add_row(str(sub.id), sub.email, sub.subscribed_at or "")
    console.print(table)


@newsletter_app.command("remove")
def newsletter_remove(
    ctx: typer.Context,
    subscriber_id: Annotated[int, typer.Argument()],
    yes: YesOption = False,
) -> None:
    """Remove a subscriber."""
    page = _page(NewsletterPage, ctx, yes)
    if page.remove(subscriber_id):
        console.print(f"Removed subscriber #{subscriber_id}")
    _check(page)


# ── Settings and profile ─────────────────────────────────────────────────


@settings_app.command("show")
def settings_show(ctx: typer.Context) -> None:
    """Show site settings by section."""
    form = _page(SiteSettingsForm, ctx)
    form.load()
    _check(form)
    if not form.settings:
        console.print("[yellow]No settings found.[/yellow]")
        return
    for group in form.groups():
        console.print(f"\n[bold]{group.title}[/bold]")
        for field in group.fields:
            console.print(f"  {field.label} ({field.key}): {form.values.get(field.key, '')}")


@settings_app.command("set")
def settings_set(
    ctx: typer.Context,
    assignments: Annotated[list[str], typer.Argument(help="KEY=VALUE pairs.")],
) -> None:
    """Change settings; the whole settings map is saved."""
    form = _page(SiteSettingsForm, ctx)
    form.load()
    _check(form)
    for assignment in assignments:
        key, sep, value = assignment.partition("=")
        if not sep or not key:
            console.print(f"[red]Error:[/red] Expected KEY=VALUE, got: {assignment}")
            raise typer.Exit(1)
        form.set(key, value)
    form.submit()
    _check(form)
    console.print(f"[green]{form.success}[/green]")


@profile_app.command("show")
def profile_show(ctx: typer.Context) -> None:
    """Show your account."""
    whoami(ctx)


@profile_app.command("update")
def profile_update(
    ctx: typer.Context,
    username: Annotated[Optional[str], typer.Option("--username")] = None,
    email: Annotated[Optional[str], typer.Option("--email")] = None,
    change_password: Annotated[
        bool,
        typer.Option("--change-password", help="Prompt for current and new password."),
    ] = False,
) -> None:
    """Update username, email, or password."""
    form = _page(ProfileForm, ctx)
    form.load()
    _check(form)
    if username is not None:
        form.username = username
    if email is not None:
        form.email = email
    if change_password:
        form.current_password = typer.prompt("Current password", hide_input=True)
        form.new_password = typer.prompt("New password", hide_input=True)
        form.confirm_password = typer.prompt("Confirm new password", hide_input=True)
    form.submit()
    _check(form)
    console.print(f"[green]{form.success}[/green]")


if __name__ == "__main__":
    app()
