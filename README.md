# ghprofilestats

Gathers statistics about a GitHub account through the GitHub GraphQL API and
writes them into the `<tspan>` elements of profile SVG cards.

It counts:

- lines of code added and deleted by you across your repositories
- your commits, from a local per-repository cache
- stars on the repositories you own
- repositories you own, and repositories you own, collaborate on or belong to
  through an organisation
- issues and pull requests you have opened

## Installation

```
pip install .
```

## Configuration

Set the following variables in the environment, or in a `.env` file that
can be found from the working directory:

```
USER_NAME=your-github-login
ACCESS_TOKEN=token
```

`ACCESS_TOKEN` must be a GitHub personal access token that can read your
repositories. It is sent as a `Bearer` token on every request.

## Usage

Run from the directory that holds `src/dark_mode.svg` and
`src/light_mode.svg`:

```
ghprofilestats
```

The command prints how long each step took and how many GraphQL calls were
made, then overwrites both SVG files in place with the new figures. The
values go into fixed `<tspan>` positions (counted in document order from 0):
repositories at 34, contributed repositories at 36, stars at 38, commits at
40, issues at 42, pull requests at 44, net lines of code at 46, and added and
deleted lines at 47 and 48. A file with fewer tspans than that is rejected.

If anything fails (a missing variable, an HTTP error, an unreadable file), the
command prints `Error: ...` to standard error and exits with status 1.

## The cache

Per-repository commit and line counts are kept under `cache/`, in a file named
after the SHA-256 of your user name (`ghprofilestats.cache.cache_filename`).
The first seven lines are a comment block that is kept when the cache is
rebuilt; each line after it is

```
<sha256 of owner/name> <total commits> <your commits> <lines added> <lines deleted>
```

A repository's history is queried again only when its total commit count
changes. When the number of repositories differs from the number of cache
lines, the cache is rebuilt with zeroed rows. If a history request fails, the
comment block and partial data are saved to the cache file before the error is
raised.

## Using it as a library

```python
from ghprofilestats.queries import user_getter, graph_repos_stars
from ghprofilestats.svg import svg_element_getter

owner_id, created_at = user_getter("octocat")
texts = svg_element_getter("src/dark_mode.svg")  # prints and returns each tspan's text
```

Other entry points:

- `ghprofilestats.queries`: `loc_query`, `cache_builder`, `recursive_loc`,
  `loc_counter_one_repo`, `graph_repos_stars`, `stats_getter`
- `ghprofilestats.cache`: `commit_counter`, `flush_cache`, `force_close_file`,
  and `add_archive`, which totals a `cache/repository_archive.txt` file
  (the command itself does not read it)
- `ghprofilestats.svg`: `collect_tspans`, `svg_overwrite`
- `ghprofilestats.utility`: `perf_counter`, `formatter`, `query_count`,
  `query_counts`, `simple_request`

`loc_counter_one_repo` and `recursive_loc` count commits by the account whose
node id was recorded with `ghprofilestats.config.set_owner_id`; it may be set
once per process.

## Running the tests

```
pip install .[test]
pytest
```