"""Email intake - webhook receiving recordings as email attachments"""
