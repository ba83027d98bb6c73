import click

NAME_WIDTH = 44
STATUS_WIDTH = 8


def truncate_at(text, width):
    """Cut ``text`` to ``width`` characters, ending in an ellipsis when shortened."""
    if len(text) > width:
        return text[:width - 3] + '...'
    return text


def format_task(task):
    # pad before styling, escape codes would throw the widths off
    if task.is_done:
        status = click.style('Done'.ljust(STATUS_WIDTH), fg='green')
    else:
        status = click.style('Pending'.ljust(STATUS_WIDTH), fg='red')
    return '{} | {} {} {}'.format(
        click.style(f'{task.id:>4}', fg='cyan', bold=True),
        click.style(f'{truncate_at(task.name, NAME_WIDTH):<{NAME_WIDTH}}', bold=True),
        status,
        click.style(str(task.date_added), dim=True),
    )


def print_tasks(tasks):
    for task in tasks:
        click.echo(format_task(task))
