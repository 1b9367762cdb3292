"""Pure domain logic: exceptions, lesson content, unlock policy, invite tokens."""
