"""Domain layer for loanledger application.

Services are imported from their modules directly (loanledger.domain.account,
loanledger.domain.coordinator) since they depend on loanledger.database,
which in turn imports the entities from here.
"""
