# zbplugins

Building blocks for chat-bot plugins that do not depend on any bot framework.
Each module holds the rules, text and storage of one plugin. Storage uses the
standard library's `sqlite3`. The package has no third-party dependencies.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Modules

- `zbplugins.nsfw`: `Picture` holds classifier probabilities. `judge` turns
  them into a verdict. `auto_judge` does the same, or returns `None` when the
  picture is neutral or nothing was flagged.
- `zbplugins.runcode`: `parse_command` turns a `>runcode` / `>runcoderaw`
  command into a `RunRequest` (raw flag, lower-cased language, unescaped code).
  `cut_too_long` trims output that has more than 30 line breaks or more than
  1000 characters.
- `zbplugins.realcugan`: `select_model` picks the upscaling scale and the
  denoise branch from the spell text and the image size. `model_name` gives the
  model file name. `build_payload` builds the JSON-ready request body for an
  image.
- `zbplugins.nbnhhsh`: `match_query` recognises `??abbr` queries.
  `parse_guess` reads the expansions from a guess response. `format_reply`
  formats the answer.
- `zbplugins.reborn`: `WeightedChooser` makes weighted random picks.
  `load_rates` builds a birthplace chooser from a JSON list of name and weight
  pairs. `gender_chooser` returns the gender chooser. `reborn_text` produces
  the outcome of one attempt.
- `zbplugins.sleep`: `SleepDB` records good nights and good mornings per
  group and reports each member's place in the order and the elapsed time.
  Helpers: `time_duration`, `is_morning`, `is_evening`, `morning_reply`,
  `evening_reply`.
- `zbplugins.nativewife`: `WifeStore` keeps pictures in one folder per group.
  It offers `draw`, `add` and `remove`, and `draw` raises `LookupError` when
  the group has no pictures. `daily_index` gives a draw that stays the same for
  one name on one day. `extract_name` and `parse_permission_toggle` parse
  commands.
- `zbplugins.omikuji`: `KujiDB` stores slip interpretations. `image_names`
  gives the two image file names of a slip.
- `zbplugins.score`: `ScoreDB` stores level scores and daily sign-in counts.
  `get_rank`, `next_rank_score` and `get_hour_word` cover the level table and
  the greetings.
- `zbplugins.tiangou`: `TiangouDB` returns random diary lines.
- `zbplugins.tarot`: `TarotDeck`, built from the card and spread JSON
  documents with `TarotDeck.from_json`, draws distinct cards with their
  orientation, looks cards up by name, lists the major arcana and lays out
  spreads. Also provided: `Card`, `Formation`, `card_range`,
  `parse_draw_count`.
- `zbplugins.nihongo`: `GrammarDB` returns random grammar notes by tag or by
  keyword. `Grammar.render` formats a note. `match_tag_query` and
  `match_keyword_query` parse commands.
- `zbplugins.vtb`: `VtbDB` stores a three-level catalogue of VTuber voice
  quotations. It builds the numbered menus and stores list and page responses
  (`store_vtb_list`, `store_vtb`). `decode_escaped_unicode` expands literal
  `\uXXXX` sequences.
- `zbplugins.vtb_quotation`: `QuotationSession` walks a user through the
  three menus. Each input returns a `StepResult`. `escape_record_url` and
  `record_filename` prepare the record download.
- `zbplugins.qzone`: `QzoneDB` stores login cookies and confession-wall posts
  (`Emotion`, `Status`). It pages posts newest first and updates their review
  state.

## Example

```python
import random
from zbplugins.score import get_rank, next_rank_score
from zbplugins.reborn import gender_chooser

rank = get_rank(120)
print(rank, next_rank_score(rank))   # 4 200
print(gender_chooser().pick(random.Random(1)))
```

## What the package does not do

- It does not connect to any chat protocol and has no command-line entry
  point. Routing messages to these functions is the host application's job.
- It makes no network requests. The caller fetches remote data, such as guess
  responses, VTuber lists and pages, and pictures, and passes it in.
- It renders no images or charts. Texts are returned as strings.
- It has no keyword-triggered reply dictionary.