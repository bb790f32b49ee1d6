import io
from xml.sax.saxutils import escape

from django.utils import timezone
from reportlab.lib.pagesizes import LETTER
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer

TIMESTAMP_FORMAT = '%B %d, %Y %I:%M %p'


def _styles():
    sample = getSampleStyleSheet()
    body = ParagraphStyle('ActivityBody', parent=sample['BodyText'], fontSize=10, leading=13, splitLongWords=1)
    return {
        'title': sample['Title'],
        'heading': sample['Heading2'],
        'body': body,
        'stamp': ParagraphStyle('ActivityStamp', parent=body, fontName='Helvetica-Oblique', fontSize=8),
    }


def render_activity_pdf(job, activities):
    """Printable activity history of a job, newest first."""
    buffer = io.BytesIO()
    title = f"Activity Log - Job {job.job_number}"
    doc = SimpleDocTemplate(
        buffer,
        pagesize=LETTER,
        title=title,
        leftMargin=0.75 * inch,
        rightMargin=0.75 * inch,
        topMargin=0.75 * inch,
        bottomMargin=0.75 * inch,
    )
    styles = _styles()

    story = [Paragraph(escape(title), styles['title'])]
    generated = timezone.localtime().strftime(TIMESTAMP_FORMAT)
    for label, value in (
        ('Project', job.project_name),
        ('Buyer/Client', job.buyer),
        ('Project Manager', job.salesman),
        ('Generated', generated),
    ):
        story.append(Paragraph(f"<b>{label}:</b> {escape(str(value or ''))}", styles['body']))

    story.append(Paragraph('Activities', styles['heading']))
    for activity in activities:
        story.append(Paragraph(escape(activity.description), styles['body']))
        story.append(Paragraph(
            timezone.localtime(activity.created_at).strftime(TIMESTAMP_FORMAT),
            styles['stamp'],
        ))
        story.append(Spacer(1, 6))

    doc.build(story)
    return buffer.getvalue()
