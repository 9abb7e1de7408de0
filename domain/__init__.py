"""Describes the ChefAI domain. Centres around turning ingredients into a `Recipe`.

Why is this hard?

- The recipe comes back from a large language model as free text, so every
  field is dug out with best-effort parsing and has a default to fall back on.
- The picture comes from a second model which needs a short, telling prompt,
  so ingredients are ranked by how recognisable they are on a plate.
- Neither model is allowed to break the caller. Generation always produces a
  recipe.

Persistence of favourites and recent recipes is plain CRUD on top.
"""
