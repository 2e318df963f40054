"""Mutation batch handed over by the external planner."""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator

from zonesync.base.endpoint import Endpoint


class Changes(BaseModel):
    """Four-way diff between current and desired DNS state.

    ``update_new`` and ``update_old`` are parallel lists: the entry at a
    given position in ``update_old`` is the superseded value of the entry
    at the same position in ``update_new``.
    """

    create: list[Endpoint] = Field(default_factory=list)
    update_new: list[Endpoint] = Field(default_factory=list)
    update_old: list[Endpoint] = Field(default_factory=list)
    delete: list[Endpoint] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_update_pairs(self) -> Changes:
        if len(self.update_new) != len(self.update_old):
            raise ValueError(
                f"update_new has {len(self.update_new)} entries but "
                f"update_old has {len(self.update_old)}"
            )
        return self

    def is_empty(self) -> bool:
        return not (self.create or self.update_new or self.update_old or self.delete)
