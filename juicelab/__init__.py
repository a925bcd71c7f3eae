"""JuiceLab loyalty ledger: users, bonuses, referrals, levels, achievements."""
